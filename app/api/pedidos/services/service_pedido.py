from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Optional, List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel, UserRole, STAFF_ROLES
from app.api.cadastros.repositories.repo_usuarios import UsuarioRepository
from app.api.mesas.models.model_mesa import StatusMesa
from app.api.mesas.repositories.repo_mesas import MesaRepository
from app.api.mesas.services.service_mesa_status import MesaStatusService
from app.api.notifications.services.notification_service import NotificationService
from app.api.pedidos.models.model_pedido import (
    PedidoModel,
    StatusPedido,
    TipoEntrega,
    STATUS_TERMINAIS,
    STATUS_EM_ABERTO,
)
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository, PedidoFiltro
from app.api.pedidos.schemas.schema_pedido import (
    CriarPedidoRequest,
    FinalizarPedidoMesaRequest,
    AtualizarPedidoRequest,
    AdicionarItensRequest,
    PagamentoRequest,
    AvaliacaoRequest,
    PedidoResponse,
    PedidoListResponse,
    PaginacaoResponse,
    ResumoPedidosResponse,
    PedidoHistoricoResponse,
)
from app.api.pedidos.services.service_pedido_helpers import precificar_itens, total_itens, _dec
from app.utils.database_utils import today_sp, day_bounds
from app.utils.logger import logger
from app.utils.prometheus_metrics import record_pedido_criado, record_pedido_status

# Status em que o cliente ainda pode incluir itens no próprio pedido
STATUS_CLIENTE_EDITAVEL = (StatusPedido.PENDENTE, StatusPedido.CONFIRMADO)


class PedidoService:
    """
    Regras de pedidos. Toda alteração que mexe no conjunto de pedidos ativos
    de uma mesa recalcula o status da mesa antes do commit, na mesma transação.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = PedidoRepository(db)
        self.repo_mesa = MesaRepository(db)
        self.mesa_status = MesaStatusService(db)
        self.notifications = NotificationService(db)

    # ---------------- Helpers ----------------
    def _salvar(self, pedido: PedidoModel) -> PedidoResponse:
        self.db.commit()
        self.db.refresh(pedido)
        return PedidoResponse.model_validate(pedido)

    def _recalcular_mesa(self, pedido: PedidoModel, usuario_id: Optional[int], motivo: str):
        if pedido.mesa_id:
            self.mesa_status.recalcular_status(pedido.mesa_id, motivo=motivo, usuario_id=usuario_id)

    @staticmethod
    def _assert_acesso(pedido: PedidoModel, usuario: UsuarioModel):
        if not usuario.is_staff and pedido.usuario_id != usuario.id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Acesso negado a este pedido")

    def _mudar_status(
        self,
        pedido: PedidoModel,
        novo_status: StatusPedido,
        usuario: UsuarioModel,
        descricao: Optional[str] = None,
    ) -> bool:
        atual = pedido.status
        if novo_status == atual:
            return False
        if atual in STATUS_TERMINAIS and not (
            atual == StatusPedido.ENTREGUE and novo_status == StatusPedido.FINALIZADO
        ):
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"Pedido {atual.value} não pode ser alterado para {novo_status.value}",
            )

        pedido.status = novo_status
        if novo_status in (StatusPedido.ENTREGUE, StatusPedido.FINALIZADO) and not pedido.pago:
            pedido.pago = True
        self.repo.add_historico(
            pedido,
            status_anterior=atual,
            status_novo=novo_status,
            usuario_id=usuario.id,
            descricao=descricao,
        )
        record_pedido_status(novo_status.value)
        logger.info(
            f"[Pedidos] Status alterado - pedido_id={pedido.id}, {atual.value} -> {novo_status.value}, "
            f"usuario_id={usuario.id}"
        )

        if novo_status == StatusPedido.PRONTO:
            mesa_numero = pedido.mesa.numero if pedido.mesa_id else None
            self.notifications.notificar_pedido_pronto(pedido, mesa_numero)
        if novo_status in STATUS_TERMINAIS:
            self._recalcular_mesa(pedido, usuario.id, f"Pedido #{pedido.id} {novo_status.value}")
        return True

    def _adicionar_itens(self, pedido: PedidoModel, itens, *, exigir_preco_positivo: bool = False):
        for item in precificar_itens(self.db, itens, exigir_preco_positivo=exigir_preco_positivo):
            self.repo.add_item(
                pedido,
                produto_id=item.produto_id,
                quantidade=item.quantidade,
                preco_unitario=item.preco_unitario,
                adicionais_ids=item.adicionais_ids,
                observacao=item.observacao,
            )
        self.repo.recalcular_total(pedido)

    # ---------------- Criação ----------------
    def criar(self, req: CriarPedidoRequest, usuario: UsuarioModel) -> PedidoResponse:
        itens = precificar_itens(self.db, req.itens)

        tipo_entrega = req.tipo_entrega
        mesa = None
        if req.mesa_id:
            mesa = self.repo_mesa.get_by_id(req.mesa_id)
            if mesa.status == StatusMesa.MANUTENCAO:
                raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Mesa {mesa.numero} está em manutenção")
            tipo_entrega = TipoEntrega.MESA
        elif tipo_entrega == TipoEntrega.MESA:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Pedidos de mesa exigem mesa_id")

        if tipo_entrega == TipoEntrega.DELIVERY and not (req.endereco_entrega or "").strip():
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Endereço de entrega é obrigatório para delivery")

        pedido = self.repo.create(
            usuario_id=usuario.id,
            mesa_id=mesa.id if mesa else None,
            status=StatusPedido.CONFIRMADO,
            tipo_entrega=tipo_entrega,
            endereco_entrega=req.endereco_entrega,
            metodo_pagamento=req.metodo_pagamento,
            observacoes=req.observacoes,
            total=total_itens(itens),
        )
        for item in itens:
            self.repo.add_item(
                pedido,
                produto_id=item.produto_id,
                quantidade=item.quantidade,
                preco_unitario=item.preco_unitario,
                adicionais_ids=item.adicionais_ids,
                observacao=item.observacao,
            )
        self.repo.add_historico(
            pedido,
            status_anterior=None,
            status_novo=StatusPedido.CONFIRMADO,
            usuario_id=usuario.id,
            descricao="Pedido criado",
        )

        if mesa:
            self.mesa_status.recalcular_status(
                mesa.id, motivo=f"Pedido #{pedido.id} criado", usuario_id=usuario.id
            )
        self.notifications.notificar_novo_pedido(pedido, usuario.nome, mesa.numero if mesa else None)
        record_pedido_criado("mesa" if mesa else tipo_entrega.value.lower())

        logger.info(
            f"[Pedidos] Pedido criado - id={pedido.id}, usuario_id={usuario.id}, "
            f"mesa_id={pedido.mesa_id}, total={pedido.total}"
        )
        return self._salvar(pedido)

    def finalizar_pedido_mesa(self, req: FinalizarPedidoMesaRequest, usuario: UsuarioModel) -> PedidoResponse:
        mesa = self.repo_mesa.get_by_id(req.mesa_id)
        em_aberto = self.repo.list_em_aberto_by_mesa(mesa.id)
        if em_aberto:
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"Mesa {mesa.numero} já possui pedido em aberto (#{em_aberto[0].id})",
            )

        itens = precificar_itens(self.db, req.itens, exigir_preco_positivo=True)
        total = total_itens(itens)
        if total <= 0:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Total do pedido deve ser maior que zero")

        pedido = self.repo.create(
            usuario_id=usuario.id,
            mesa_id=mesa.id,
            status=StatusPedido.PENDENTE,
            tipo_entrega=TipoEntrega.MESA,
            metodo_pagamento=req.metodo_pagamento,
            observacoes=req.observacoes,
            finalizado_por_id=usuario.id,
            total=total,
        )
        for item in itens:
            self.repo.add_item(
                pedido,
                produto_id=item.produto_id,
                quantidade=item.quantidade,
                preco_unitario=item.preco_unitario,
                adicionais_ids=item.adicionais_ids,
                observacao=item.observacao,
            )
        self.repo.add_historico(
            pedido,
            status_anterior=None,
            status_novo=StatusPedido.PENDENTE,
            usuario_id=usuario.id,
            descricao="Pedido registrado pela equipe",
        )
        self.mesa_status.recalcular_status(
            mesa.id, motivo=f"Pedido #{pedido.id} registrado", usuario_id=usuario.id
        )
        self.notifications.notificar_novo_pedido(pedido, usuario.nome, mesa.numero)
        record_pedido_criado("equipe")

        logger.info(f"[Pedidos] Pedido de mesa registrado - id={pedido.id}, mesa_id={mesa.id}, total={total}")
        return self._salvar(pedido)

    # ---------------- Consultas ----------------
    def _filtro_por_perfil(
        self,
        usuario: UsuarioModel,
        *,
        usuario_id: Optional[int] = None,
        mesa_id: Optional[int] = None,
        status_list: Optional[List[StatusPedido]] = None,
        pago: Optional[bool] = None,
        data: Optional[date] = None,
        data_inicio: Optional[date] = None,
        data_fim: Optional[date] = None,
    ) -> PedidoFiltro:
        filtro = PedidoFiltro(mesa_id=mesa_id, status=status_list or [], pago=pago)

        if data is not None:
            filtro.inicio, filtro.fim = day_bounds(data)
        else:
            if data_inicio is not None:
                filtro.inicio = datetime.combine(data_inicio, time.min)
            if data_fim is not None:
                filtro.fim = datetime.combine(data_fim, time.max)

        if usuario.role == UserRole.CLIENTE:
            filtro.usuario_id = usuario.id
            return filtro

        filtro.usuario_id = usuario_id
        if filtro.inicio is None and filtro.fim is None:
            filtro.inicio, filtro.fim = day_bounds(today_sp())
        if usuario.role == UserRole.GERENTE:
            filtro.usuario_ids = UsuarioRepository(self.db).list_ids_by_roles(STAFF_ROLES)
        return filtro

    @staticmethod
    def parse_status(valor: Optional[str]) -> List[StatusPedido]:
        if not valor:
            return []
        resultado = []
        for parte in valor.split(","):
            parte = parte.strip()
            if not parte:
                continue
            try:
                resultado.append(StatusPedido(parte))
            except ValueError:
                raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Status inválido: {parte}")
        return resultado

    def listar(
        self,
        usuario: UsuarioModel,
        *,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        status_param: Optional[str] = None,
        **filtros,
    ) -> PedidoListResponse:
        filtro = self._filtro_por_perfil(usuario, status_list=self.parse_status(status_param), **filtros)
        pedidos, total = self.repo.list_filtrado(
            filtro,
            offset=(page - 1) * limit,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return PedidoListResponse(
            pedidos=[PedidoResponse.model_validate(p) for p in pedidos],
            paginacao=PaginacaoResponse(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit) if total else 0,
            ),
        )

    def resumo(self, usuario: UsuarioModel, **filtros) -> ResumoPedidosResponse:
        filtro = self._filtro_por_perfil(usuario, status_list=list(STATUS_EM_ABERTO), **filtros)
        total, primeira, ultima = self.repo.resumo(filtro)
        return ResumoPedidosResponse(total=total, primeira_data=primeira, ultima_data=ultima)

    def buscar(self, pedido_id: int, usuario: UsuarioModel) -> PedidoResponse:
        pedido = self.repo.get_or_404(pedido_id)
        self._assert_acesso(pedido, usuario)
        return PedidoResponse.model_validate(pedido)

    def historico(self, pedido_id: int, usuario: UsuarioModel) -> List[PedidoHistoricoResponse]:
        pedido = self.repo.get_or_404(pedido_id)
        self._assert_acesso(pedido, usuario)
        return [PedidoHistoricoResponse.model_validate(h) for h in self.repo.list_historico(pedido_id)]

    # ---------------- Alterações ----------------
    def atualizar(self, pedido_id: int, req: AtualizarPedidoRequest, usuario: UsuarioModel) -> PedidoResponse:
        pedido = self.repo.get_or_404(pedido_id)
        self._assert_acesso(pedido, usuario)
        if not usuario.is_staff and req.status is not None and req.status != StatusPedido.CANCELADO:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Clientes só podem cancelar o próprio pedido")

        if req.metodo_pagamento is not None:
            pedido.metodo_pagamento = req.metodo_pagamento
        if req.status is not None:
            self._mudar_status(pedido, req.status, usuario)
        return self._salvar(pedido)

    def cancelar(self, pedido_id: int, usuario: UsuarioModel) -> PedidoResponse:
        pedido = self.repo.get_or_404(pedido_id)
        self._assert_acesso(pedido, usuario)
        if pedido.status == StatusPedido.CANCELADO:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Pedido já está cancelado")
        self._mudar_status(pedido, StatusPedido.CANCELADO, usuario, descricao="Pedido cancelado")
        return self._salvar(pedido)

    def adicionar_itens(self, pedido_id: int, req: AdicionarItensRequest, usuario: UsuarioModel) -> PedidoResponse:
        pedido = self.repo.get_or_404(pedido_id)
        self._assert_acesso(pedido, usuario)
        if usuario.is_staff:
            if pedido.is_terminal:
                raise HTTPException(
                    status.HTTP_400_BAD_REQUEST,
                    f"Não é possível adicionar itens a um pedido {pedido.status.value}",
                )
        elif pedido.status not in STATUS_CLIENTE_EDITAVEL:
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                "Itens só podem ser adicionados enquanto o pedido está pendente ou confirmado",
            )

        self._adicionar_itens(pedido, req.itens)
        logger.info(f"[Pedidos] Itens adicionados - pedido_id={pedido.id}, novo_total={pedido.total}")
        return self._salvar(pedido)

    def receber(self, pedido_id: int, usuario: UsuarioModel) -> PedidoResponse:
        pedido = self.repo.get_or_404(pedido_id)
        if pedido.recebido:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Pedido já foi recebido")

        pedido.recebido = True
        pedido.ativo = False
        self.repo.add_historico(
            pedido,
            status_anterior=pedido.status,
            status_novo=pedido.status,
            usuario_id=usuario.id,
            descricao="Pedido recebido",
        )
        self._recalcular_mesa(pedido, usuario.id, f"Pedido #{pedido.id} recebido")
        logger.info(f"[Pedidos] Pedido recebido - id={pedido.id}, usuario_id={usuario.id}")
        return self._salvar(pedido)

    def processar_pagamento(self, pedido_id: int, req: PagamentoRequest, usuario: UsuarioModel) -> PedidoResponse:
        pedido = self.repo.get_or_404(pedido_id)
        if pedido.pago or pedido.status in (StatusPedido.ENTREGUE, StatusPedido.FINALIZADO):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Pedido já foi pago ou finalizado")
        if pedido.status == StatusPedido.CANCELADO:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Pedido cancelado não pode ser pago")

        pedido.pago = True
        pedido.metodo_pagamento = req.metodo_pagamento
        self._mudar_status(pedido, StatusPedido.ENTREGUE, usuario, descricao="Pagamento registrado")
        self.notifications.notificar_pagamento_recebido(
            pedido.id, _dec(req.valor_pago), req.metodo_pagamento.value
        )
        logger.info(
            f"[Pedidos] Pagamento registrado - pedido_id={pedido.id}, valor={req.valor_pago}, "
            f"metodo={req.metodo_pagamento.value}"
        )
        return self._salvar(pedido)

    def avaliar(self, pedido_id: int, req: AvaliacaoRequest, usuario: UsuarioModel) -> PedidoResponse:
        pedido = self.repo.get_or_404(pedido_id)
        if pedido.usuario_id != usuario.id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Somente o dono do pedido pode avaliá-lo")
        if pedido.status not in (StatusPedido.ENTREGUE, StatusPedido.FINALIZADO):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Somente pedidos entregues ou finalizados podem ser avaliados")
        if pedido.avaliacao_nota is not None:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Pedido já foi avaliado")

        pedido.avaliacao_nota = req.nota
        pedido.avaliacao_comentario = req.comentario
        return self._salvar(pedido)
