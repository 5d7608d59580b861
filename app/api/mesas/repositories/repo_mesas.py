from __future__ import annotations
from typing import Optional, List

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.api.mesas.models.model_mesa import MesaModel, MesaHistoricoModel, StatusMesa
from app.utils.logger import logger


class MesaRepository:
    def __init__(self, db: Session):
        self.db = db

    def add_mesa_historico(
        self,
        mesa: MesaModel,
        status_anterior: StatusMesa | None,
        *,
        motivo: str | None = None,
        usuario_id: int | None = None,
    ) -> MesaHistoricoModel:
        historico = MesaHistoricoModel(
            mesa_id=mesa.id,
            status_anterior=status_anterior.value if status_anterior else None,
            status_novo=mesa.status.value,
            responsavel_id=mesa.responsavel_id,
            usuario_id=usuario_id,
            motivo=motivo,
        )
        self.db.add(historico)
        return historico

    # -------- Consultas --------
    def get_by_id(self, mesa_id: int) -> MesaModel:
        mesa = self.db.query(MesaModel).filter(MesaModel.id == mesa_id).first()
        if not mesa:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Mesa não encontrada")
        return mesa

    def get_by_id_for_update(self, mesa_id: int) -> MesaModel:
        """Trava a linha da mesa durante o recálculo de status (FOR UPDATE no Postgres)."""
        mesa = (
            self.db.query(MesaModel)
            .filter(MesaModel.id == mesa_id)
            .with_for_update()
            .first()
        )
        if not mesa:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Mesa não encontrada")
        return mesa

    def get_by_numero(self, numero: int) -> Optional[MesaModel]:
        return self.db.query(MesaModel).filter(MesaModel.numero == numero).first()

    def list_all(
        self,
        *,
        status: Optional[StatusMesa] = None,
        responsavel_id: Optional[int] = None,
    ) -> List[MesaModel]:
        query = self.db.query(MesaModel)
        if status is not None:
            query = query.filter(MesaModel.status == status)
        if responsavel_id is not None:
            query = query.filter(MesaModel.responsavel_id == responsavel_id)
        return query.order_by(MesaModel.numero).all()

    def list_historico(self, mesa_id: int) -> List[MesaHistoricoModel]:
        return (
            self.db.query(MesaHistoricoModel)
            .filter(MesaHistoricoModel.mesa_id == mesa_id)
            .order_by(MesaHistoricoModel.id)
            .all()
        )

    def get_stats(self) -> dict:
        stats = {s.value.lower(): 0 for s in StatusMesa}
        for mesa in self.db.query(MesaModel.status).all():
            stats[mesa.status.value.lower()] += 1
        stats["total"] = sum(stats.values())
        return stats

    # -------- Escrita --------
    def create(self, **data) -> MesaModel:
        mesa = MesaModel(**data)
        self.db.add(mesa)
        self.db.flush()
        self.add_mesa_historico(mesa, None, motivo=f"Mesa {mesa.numero} criada")
        logger.info(f"[Mesas] Mesa criada - id={mesa.id}, numero={mesa.numero}")
        return mesa

    def update_status(
        self,
        mesa: MesaModel,
        novo_status: StatusMesa,
        *,
        responsavel_id: int | None,
        motivo: str | None = None,
        usuario_id: int | None = None,
    ) -> bool:
        """
        Aplica status/responsável. Retorna True se algo mudou.
        Não faz commit: quem chama controla a transação.
        """
        status_anterior = mesa.status
        if status_anterior == novo_status and mesa.responsavel_id == responsavel_id:
            return False

        mesa.status = novo_status
        mesa.responsavel_id = responsavel_id
        self.db.flush()
        self.db.expire(mesa, ["responsavel"])
        self.add_mesa_historico(mesa, status_anterior, motivo=motivo, usuario_id=usuario_id)
        logger.info(
            f"[Mesas] Status da mesa alterado - id={mesa.id}, "
            f"{status_anterior.value if status_anterior else None} -> {novo_status.value}, "
            f"responsavel_id={responsavel_id}"
        )
        return True

    def liberar_mesa(self, mesa: MesaModel, **kwargs) -> bool:
        """Libera uma mesa (LIVRE, sem responsável)"""
        return self.update_status(mesa, StatusMesa.LIVRE, responsavel_id=None, **kwargs)

    def ocupar_mesa(self, mesa: MesaModel, responsavel_id: int | None, **kwargs) -> bool:
        """Ocupa uma mesa (OCUPADA, com responsável)"""
        return self.update_status(mesa, StatusMesa.OCUPADA, responsavel_id=responsavel_id, **kwargs)

    def delete(self, mesa: MesaModel) -> None:
        self.db.delete(mesa)
        self.db.flush()
