from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.mesas.models.model_mesa import MesaModel, StatusMesa
from app.api.mesas.repositories.repo_mesas import MesaRepository
from app.api.notifications.services.notification_service import NotificationService
from app.api.pedidos.models.model_pedido import StatusPedido
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.utils.logger import logger
from app.utils.prometheus_metrics import record_mesa_transicao, record_pedido_status

# Sem pedidos ativos, mesas nestes status não voltam sozinhas para LIVRE
STATUS_PRESERVADOS = (StatusMesa.MANUTENCAO, StatusMesa.RESERVADA)


class MesaStatusService:
    """
    Coordena o ciclo de vida mesa x pedidos.

    Regra: pedido ativo = status não terminal e não recebido.
    Sem pedidos ativos a mesa fica LIVRE e sem responsável; com pelo menos um,
    fica OCUPADA e o responsável é o usuário do pedido ativo mais recente.

    Nenhum método daqui faz commit: o recálculo roda na mesma transação
    da alteração de pedido que o disparou.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo_mesa = MesaRepository(db)
        self.repo_pedidos = PedidoRepository(db)
        self.notifications = NotificationService(db)

    def _aplicar_status(
        self,
        mesa: MesaModel,
        novo_status: StatusMesa,
        responsavel_id: Optional[int],
        *,
        motivo: Optional[str] = None,
        usuario_id: Optional[int] = None,
    ) -> bool:
        """Aplica LIVRE/OCUPADA. Retorna True somente se o status mudou."""
        status_anterior = mesa.status
        if novo_status == StatusMesa.OCUPADA:
            self.repo_mesa.ocupar_mesa(mesa, responsavel_id, motivo=motivo, usuario_id=usuario_id)
        else:
            self.repo_mesa.liberar_mesa(mesa, motivo=motivo, usuario_id=usuario_id)

        if status_anterior == novo_status:
            return False

        record_mesa_transicao(novo_status.value)
        if novo_status == StatusMesa.OCUPADA:
            responsavel = self.db.get(UsuarioModel, responsavel_id) if responsavel_id else None
            nome = responsavel.nome if responsavel else None
            self.notifications.notificar_mesa_ocupada(mesa.numero, nome)
        else:
            self.notifications.notificar_mesa_liberada(mesa.numero)
        return True

    def recalcular_status(
        self,
        mesa_id: int,
        *,
        motivo: Optional[str] = None,
        usuario_id: Optional[int] = None,
    ) -> dict:
        # autoflush está desligado: garante que as alterações pendentes de pedido entrem na consulta
        self.db.flush()
        mesa = self.repo_mesa.get_by_id_for_update(mesa_id)
        ativos = self.repo_pedidos.list_ativos_by_mesa(mesa_id)

        if ativos:
            alterado = self._aplicar_status(
                mesa,
                StatusMesa.OCUPADA,
                ativos[0].usuario_id,
                motivo=motivo or f"Pedido #{ativos[0].id} ativo",
                usuario_id=usuario_id,
            )
        elif mesa.status in STATUS_PRESERVADOS:
            alterado = False
        else:
            alterado = self._aplicar_status(
                mesa,
                StatusMesa.LIVRE,
                None,
                motivo=motivo or "Nenhum pedido ativo",
                usuario_id=usuario_id,
            )

        logger.info(
            f"[Mesas] Status recalculado - mesa_id={mesa_id}, status={mesa.status.value}, "
            f"pedidos_ativos={len(ativos)}, alterado={alterado}"
        )
        return {"mesa": mesa, "pedidos_ativos": len(ativos), "status_alterado": alterado}

    def verificar_status(self, mesa_id: int) -> dict:
        mesa = self.repo_mesa.get_by_id(mesa_id)
        ativos = self.repo_pedidos.list_ativos_by_mesa(mesa_id)
        deveria_estar_ocupada = bool(ativos)
        if deveria_estar_ocupada:
            consistente = mesa.status == StatusMesa.OCUPADA
        else:
            consistente = mesa.status != StatusMesa.OCUPADA
        return {
            "mesa": mesa,
            "pedidos_ativos": len(ativos),
            "deveria_estar_ocupada": deveria_estar_ocupada,
            "status_consistente": consistente,
        }

    def liberar_mesa(self, mesa_id: int, usuario) -> MesaModel:
        mesa = self.repo_mesa.get_by_id_for_update(mesa_id)
        bloqueios = self.repo_pedidos.list_bloqueiam_liberacao(mesa_id)
        if bloqueios:
            em_preparo = [p for p in bloqueios if p.status != StatusPedido.ENTREGUE]
            motivo = (
                "Há pedidos em preparo/ativos na mesa."
                if em_preparo
                else "Há pedido ENTREGUE ainda não pago."
            )
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"Não é possível liberar a mesa. {motivo}",
            )

        self._aplicar_status(
            mesa,
            StatusMesa.LIVRE,
            None,
            motivo="Mesa liberada manualmente",
            usuario_id=usuario.id,
        )
        logger.info(f"[Mesas] Mesa liberada - mesa_id={mesa_id}, usuario_id={usuario.id}")
        return mesa

    def forcar_liberacao(self, mesa_id: int, usuario) -> dict:
        mesa = self.repo_mesa.get_by_id_for_update(mesa_id)
        cancelados = []
        for pedido in self.repo_pedidos.list_ativos_by_mesa(mesa_id):
            status_anterior = pedido.status
            pedido.status = StatusPedido.CANCELADO
            self.repo_pedidos.add_historico(
                pedido,
                status_anterior=status_anterior,
                status_novo=StatusPedido.CANCELADO,
                usuario_id=usuario.id,
                descricao="Cancelado na liberação forçada da mesa",
            )
            record_pedido_status(StatusPedido.CANCELADO.value)
            cancelados.append(pedido.id)

        self.db.flush()
        self._aplicar_status(
            mesa,
            StatusMesa.LIVRE,
            None,
            motivo="Liberação forçada",
            usuario_id=usuario.id,
        )
        logger.warning(
            f"[Mesas] Liberação forçada - mesa_id={mesa_id}, usuario_id={usuario.id}, "
            f"pedidos_cancelados={cancelados}"
        )
        return {"mesa": mesa, "pedidos_cancelados": cancelados}

    def selecionar_mesa(self, mesa_id: int, usuario) -> MesaModel:
        mesa = self.repo_mesa.get_by_id_for_update(mesa_id)
        if mesa.status != StatusMesa.LIVRE:
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"Mesa {mesa.numero} está {mesa.status_descricao.lower()}",
            )
        if self.repo_pedidos.list_ativos_by_mesa(mesa_id):
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"Mesa {mesa.numero} possui pedidos ativos",
            )

        self._aplicar_status(
            mesa,
            StatusMesa.OCUPADA,
            usuario.id,
            motivo="Mesa selecionada",
            usuario_id=usuario.id,
        )
        return mesa

    def estado_completo(self, mesa_id: int) -> dict:
        mesa = self.repo_mesa.get_by_id(mesa_id)
        return {
            "mesa": mesa,
            "pedidos_ativos": self.repo_pedidos.list_ativos_by_mesa(mesa_id),
            "pedidos_pendentes_pagamento": self.repo_pedidos.list_terminais_nao_pagos_by_mesa(mesa_id),
        }
