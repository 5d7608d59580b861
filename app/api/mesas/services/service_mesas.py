from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.cadastros.repositories.repo_usuarios import UsuarioRepository
from app.api.mesas.models.model_mesa import StatusMesa
from app.api.mesas.repositories.repo_mesas import MesaRepository
from app.api.mesas.schemas.schema_mesa import (
    MesaIn,
    MesaUpdate,
    MesaOut,
    MesaHistoricoOut,
    MesaStatsOut,
    PedidoMesaResumo,
    RecalculoStatusOut,
    VerificacaoStatusOut,
    LiberacaoForcadaOut,
    MesaEstadoCompletoOut,
)
from app.api.mesas.services.service_mesa_status import MesaStatusService
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.utils.logger import logger


class MesaService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = MesaRepository(db)
        self.repo_pedidos = PedidoRepository(db)
        self.status_service = MesaStatusService(db)

    def _assert_numero_livre(self, numero: int, ignorar_id: Optional[int] = None):
        existente = self.repo.get_by_numero(numero)
        if existente and existente.id != ignorar_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Já existe uma mesa com o número {numero}")

    def _assert_usuario_existe(self, usuario_id: Optional[int]):
        if usuario_id is not None and not UsuarioRepository(self.db).get(usuario_id):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Usuário responsável não encontrado")

    def _salvar(self, mesa) -> MesaOut:
        self.db.commit()
        self.db.refresh(mesa)
        return MesaOut.model_validate(mesa)

    # -------- CRUD --------
    def listar(self, *, status: Optional[StatusMesa] = None, responsavel_id: Optional[int] = None) -> List[MesaOut]:
        return [
            MesaOut.model_validate(m)
            for m in self.repo.list_all(status=status, responsavel_id=responsavel_id)
        ]

    def buscar(self, mesa_id: int) -> MesaOut:
        return MesaOut.model_validate(self.repo.get_by_id(mesa_id))

    def stats(self) -> MesaStatsOut:
        return MesaStatsOut(**self.repo.get_stats())

    def historico(self, mesa_id: int) -> List[MesaHistoricoOut]:
        self.repo.get_by_id(mesa_id)
        return [MesaHistoricoOut.model_validate(h) for h in self.repo.list_historico(mesa_id)]

    def criar(self, data: MesaIn) -> MesaOut:
        self._assert_numero_livre(data.numero)
        self._assert_usuario_existe(data.responsavel_id)
        mesa = self.repo.create(**data.model_dump())
        return self._salvar(mesa)

    def atualizar(self, mesa_id: int, data: MesaUpdate, usuario_id: Optional[int] = None) -> MesaOut:
        mesa = self.repo.get_by_id(mesa_id)
        # responsavel_id=null limpa o responsável; nos demais campos null é ignorado
        update = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == "responsavel_id"
        }

        if "numero" in update:
            self._assert_numero_livre(update["numero"], ignorar_id=mesa_id)
        if "responsavel_id" in update:
            self._assert_usuario_existe(update["responsavel_id"])

        novo_status = update.pop("status", None)
        responsavel_id = update.pop("responsavel_id", mesa.responsavel_id)
        for key, value in update.items():
            setattr(mesa, key, value)

        if novo_status is not None or responsavel_id != mesa.responsavel_id:
            novo_status = novo_status or mesa.status
            if novo_status == StatusMesa.LIVRE:
                responsavel_id = None
            self.repo.update_status(
                mesa,
                novo_status,
                responsavel_id=responsavel_id,
                motivo="Atualização manual",
                usuario_id=usuario_id,
            )
        logger.info(f"[Mesas] Mesa atualizada - id={mesa_id}, campos={list(data.model_dump(exclude_unset=True))}")
        return self._salvar(mesa)

    def deletar(self, mesa_id: int) -> None:
        mesa = self.repo.get_by_id(mesa_id)
        if self.repo_pedidos.count_by_mesa(mesa_id):
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                "Mesa possui pedidos vinculados e não pode ser removida. Coloque-a em MANUTENCAO.",
            )
        self.repo.delete(mesa)
        self.db.commit()
        logger.info(f"[Mesas] Mesa removida - id={mesa_id}")

    # -------- Ciclo de vida --------
    def recalcular_status(self, mesa_id: int, usuario_id: Optional[int] = None) -> RecalculoStatusOut:
        resultado = self.status_service.recalcular_status(
            mesa_id, motivo="Recálculo manual", usuario_id=usuario_id
        )
        mesa = resultado["mesa"]
        return RecalculoStatusOut(
            mesa=self._salvar(mesa),
            pedidos_ativos=resultado["pedidos_ativos"],
            status_alterado=resultado["status_alterado"],
        )

    def verificar_status(self, mesa_id: int) -> VerificacaoStatusOut:
        resultado = self.status_service.verificar_status(mesa_id)
        return VerificacaoStatusOut(**{**resultado, "mesa": MesaOut.model_validate(resultado["mesa"])})

    def liberar(self, mesa_id: int, usuario) -> MesaOut:
        return self._salvar(self.status_service.liberar_mesa(mesa_id, usuario))

    def forcar_liberacao(self, mesa_id: int, usuario) -> LiberacaoForcadaOut:
        resultado = self.status_service.forcar_liberacao(mesa_id, usuario)
        return LiberacaoForcadaOut(
            mesa=self._salvar(resultado["mesa"]),
            pedidos_cancelados=resultado["pedidos_cancelados"],
        )

    def selecionar(self, mesa_id: int, usuario) -> MesaOut:
        return self._salvar(self.status_service.selecionar_mesa(mesa_id, usuario))

    def estado_completo(self, mesa_id: int) -> MesaEstadoCompletoOut:
        estado = self.status_service.estado_completo(mesa_id)
        return MesaEstadoCompletoOut(
            mesa=MesaOut.model_validate(estado["mesa"]),
            pedidos_ativos=[PedidoMesaResumo.model_validate(p) for p in estado["pedidos_ativos"]],
            pedidos_pendentes_pagamento=[
                PedidoMesaResumo.model_validate(p) for p in estado["pedidos_pendentes_pagamento"]
            ],
        )
