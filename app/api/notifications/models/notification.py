import enum
import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON, ForeignKey, Index

from app.database.db_connection import Base
from app.database.types import EnumValueType
from app.utils.database_utils import now_trimmed


class TipoNotificacao(str, enum.Enum):
    PEDIDO = "PEDIDO"
    PAGAMENTO = "PAGAMENTO"
    MESA = "MESA"
    USUARIO = "USUARIO"
    SISTEMA = "SISTEMA"
    ESTOQUE = "ESTOQUE"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return None
        alias_map = {
            "ORDER": cls.PEDIDO,
            "PAYMENT": cls.PAGAMENTO,
            "TABLE": cls.MESA,
            "USER": cls.USUARIO,
            "SYSTEM": cls.SISTEMA,
            "STOCK": cls.ESTOQUE,
            "INVENTORY": cls.ESTOQUE,
        }
        normalized = str(value).upper().strip()
        if normalized in cls.__members__:
            return cls[normalized]
        return alias_map.get(normalized)


class PrioridadeNotificacao(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return None
        normalized = str(value).lower().strip()
        for member in cls:
            if member.value == normalized:
                return member
        return None


class NotificationModel(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_usuario_ativa", "usuario_id", "ativa"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # None = notificação global (visível para todos)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=True, index=True)

    titulo = Column(String(200), nullable=False)
    mensagem = Column(Text, nullable=False)
    tipo = Column(EnumValueType(TipoNotificacao), nullable=False, index=True)
    prioridade = Column(EnumValueType(PrioridadeNotificacao), nullable=False, default=PrioridadeNotificacao.NORMAL)

    lida = Column(Boolean, nullable=False, default=False)
    ativa = Column(Boolean, nullable=False, default=True)
    dados = Column(JSON, nullable=True)

    expira_em = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=now_trimmed, nullable=False)

    @property
    def is_global(self) -> bool:
        return self.usuario_id is None

    def __repr__(self):
        return f"<Notification id={self.id} tipo={self.tipo} usuario_id={self.usuario_id}>"
