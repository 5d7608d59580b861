from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Optional, Dict, Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.notifications.models.notification import (
    NotificationModel,
    TipoNotificacao,
    PrioridadeNotificacao,
)
from app.api.notifications.repositories.notification_repository import NotificationRepository
from app.api.notifications.schemas.notification_schemas import (
    CreateNotificationRequest,
    NotificationResponse,
    NotificationListResponse,
    NotificationStatsResponse,
)
from app.config.settings import NOTIFICATION_DEFAULT_TTL_HOURS
from app.utils.database_utils import now_trimmed
from app.utils.logger import logger


class NotificationService:
    """
    Notificações in-app.

    `criar` apenas adiciona e faz flush: quem chama é dono da transação.
    Os helpers `notificar_*` nunca propagam erro, só registram no log,
    para que uma falha de notificação não derrube a operação de negócio.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository(db)

    # ---------------- Núcleo ----------------
    def criar(
        self,
        *,
        titulo: str,
        mensagem: str,
        tipo: TipoNotificacao,
        prioridade: PrioridadeNotificacao = PrioridadeNotificacao.NORMAL,
        usuario_id: Optional[int] = None,
        dados: Optional[Dict[str, Any]] = None,
        expira_em=None,
    ) -> NotificationModel:
        notification = self.repo.create(
            usuario_id=usuario_id,
            titulo=titulo,
            mensagem=mensagem,
            tipo=tipo,
            prioridade=prioridade,
            dados=dados,
            expira_em=expira_em,
        )
        logger.info(
            f"[Notifications] Notificação criada - id={notification.id}, tipo={tipo.value}, "
            f"usuario_id={usuario_id}"
        )
        return notification

    def _emitir(self, **kwargs) -> Optional[NotificationModel]:
        kwargs.setdefault("expira_em", now_trimmed() + timedelta(hours=NOTIFICATION_DEFAULT_TTL_HOURS))
        # Pendências de quem chama vão ao banco fora do savepoint (erros delas propagam)
        self.db.flush()
        try:
            # Savepoint: uma falha aqui desfaz só a notificação, a transação segue utilizável
            with self.db.begin_nested():
                return self.criar(**kwargs)
        except Exception as e:
            logger.error(f"[Notifications] Falha ao emitir notificação '{kwargs.get('titulo')}': {e}")
            return None

    # ---------------- Operações do usuário ----------------
    def _get_visivel(self, notification_id: str, usuario) -> NotificationModel:
        notification = self.repo.get_by_id(notification_id)
        if not notification or (
            notification.usuario_id is not None and notification.usuario_id != usuario.id
        ):
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Notificação não encontrada")
        return notification

    def listar(
        self,
        usuario,
        *,
        tipo: Optional[TipoNotificacao] = None,
        lida: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> NotificationListResponse:
        itens, total = self.repo.list_for_user(usuario.id, tipo=tipo, lida=lida, limit=limit, offset=offset)
        return NotificationListResponse(
            notificacoes=[NotificationResponse.model_validate(n) for n in itens],
            total=total,
            nao_lidas=self.repo.count_nao_lidas(usuario.id),
            has_more=offset + len(itens) < total,
        )

    def buscar(self, notification_id: str, usuario) -> NotificationResponse:
        return NotificationResponse.model_validate(self._get_visivel(notification_id, usuario))

    def marcar_lida(self, notification_id: str, usuario) -> NotificationResponse:
        notification = self._get_visivel(notification_id, usuario)
        notification.lida = True
        self.db.commit()
        self.db.refresh(notification)
        return NotificationResponse.model_validate(notification)

    def marcar_todas_lidas(self, usuario) -> int:
        atualizadas = self.repo.mark_all_read(usuario.id)
        self.db.commit()
        logger.info(f"[Notifications] {atualizadas} notificação(ões) marcadas como lidas - usuario_id={usuario.id}")
        return atualizadas

    def remover(self, notification_id: str, usuario) -> None:
        notification = self._get_visivel(notification_id, usuario)
        if notification.usuario_id is None and not usuario.is_gestor:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Somente gestores podem remover notificações globais")
        notification.ativa = False
        self.db.commit()

    # ---------------- Gestão ----------------
    def criar_manual(self, req: CreateNotificationRequest) -> NotificationResponse:
        notification = self.criar(**req.model_dump())
        self.db.commit()
        self.db.refresh(notification)
        return NotificationResponse.model_validate(notification)

    def limpar_expiradas(self) -> int:
        removidas = self.repo.deactivate_expired(now_trimmed())
        self.db.commit()
        if removidas:
            logger.info(f"[Notifications] {removidas} notificações expiradas foram desativadas")
        return removidas

    def estatisticas(self) -> NotificationStatsResponse:
        return NotificationStatsResponse(**self.repo.stats())

    # ---------------- Helpers de domínio ----------------
    def notificar_novo_pedido(self, pedido, cliente_nome: Optional[str] = None, mesa_numero: Optional[int] = None):
        if mesa_numero:
            mensagem = f"Pedido #{pedido.id} da Mesa {mesa_numero}" + (f" ({cliente_nome})" if cliente_nome else "")
        else:
            mensagem = f"Pedido #{pedido.id}" + (f" de {cliente_nome}" if cliente_nome else "")
        return self._emitir(
            titulo="Novo Pedido Recebido",
            mensagem=mensagem,
            tipo=TipoNotificacao.PEDIDO,
            prioridade=PrioridadeNotificacao.HIGH,
            dados={"pedido_id": pedido.id, "cliente_nome": cliente_nome, "mesa_numero": mesa_numero},
        )

    def notificar_pedido_pronto(self, pedido, mesa_numero: Optional[int] = None):
        mensagem = (
            f"Pedido #{pedido.id} da Mesa {mesa_numero} está pronto para entrega"
            if mesa_numero
            else f"Pedido #{pedido.id} está pronto para entrega"
        )
        return self._emitir(
            usuario_id=pedido.usuario_id,
            titulo="Pedido Pronto",
            mensagem=mensagem,
            tipo=TipoNotificacao.PEDIDO,
            prioridade=PrioridadeNotificacao.HIGH,
            dados={"pedido_id": pedido.id, "mesa_numero": mesa_numero},
        )

    def notificar_pagamento_recebido(self, pedido_id: int, valor, metodo: str):
        valor = Decimal(str(valor)).quantize(Decimal("0.01"))
        return self._emitir(
            titulo="Pagamento Recebido",
            mensagem=f"Pagamento de R$ {valor} via {metodo} recebido para o pedido #{pedido_id}",
            tipo=TipoNotificacao.PAGAMENTO,
            dados={"pedido_id": pedido_id, "valor": float(valor), "metodo": metodo},
        )

    def notificar_novo_usuario(self, usuario):
        return self._emitir(
            titulo="Novo Usuário Cadastrado",
            mensagem=f"{usuario.nome} foi cadastrado como {usuario.role.value}",
            tipo=TipoNotificacao.USUARIO,
            dados={"usuario_id": usuario.id, "nome": usuario.nome, "role": usuario.role.value},
        )

    def notificar_mesa_ocupada(self, mesa_numero: int, responsavel_nome: Optional[str] = None):
        return self._emitir(
            titulo="Mesa Ocupada",
            mensagem=f"Mesa {mesa_numero} foi ocupada" + (f" por {responsavel_nome}" if responsavel_nome else ""),
            tipo=TipoNotificacao.MESA,
            dados={"mesa_numero": mesa_numero, "responsavel": responsavel_nome},
        )

    def notificar_mesa_liberada(self, mesa_numero: int):
        return self._emitir(
            titulo="Mesa Liberada",
            mensagem=f"Mesa {mesa_numero} foi liberada e está disponível",
            tipo=TipoNotificacao.MESA,
            prioridade=PrioridadeNotificacao.LOW,
            dados={"mesa_numero": mesa_numero},
        )

    def notificar_estoque_baixo(self, produto):
        sem_estoque = (produto.estoque_atual or 0) <= 0
        return self._emitir(
            titulo="Produto sem estoque" if sem_estoque else "Estoque baixo",
            mensagem=(
                f"{produto.nome} está sem estoque"
                if sem_estoque
                else f"{produto.nome} está com estoque baixo ({produto.estoque_atual} restantes)"
            ),
            tipo=TipoNotificacao.ESTOQUE,
            prioridade=PrioridadeNotificacao.URGENT if sem_estoque else PrioridadeNotificacao.HIGH,
            dados={
                "produto_id": produto.id,
                "estoque_atual": produto.estoque_atual,
                "estoque_minimo": produto.estoque_minimo,
            },
        )

    def notificar_sistema(self, mensagem: str, prioridade: PrioridadeNotificacao = PrioridadeNotificacao.NORMAL):
        return self._emitir(
            titulo="Notificação do Sistema",
            mensagem=mensagem,
            tipo=TipoNotificacao.SISTEMA,
            prioridade=prioridade,
        )
