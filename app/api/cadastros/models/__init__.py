from .model_usuario import UsuarioModel, UserRole, STAFF_ROLES, MANAGEMENT_ROLES

__all__ = [
    "UsuarioModel",
    "UserRole",
    "STAFF_ROLES",
    "MANAGEMENT_ROLES",
]
