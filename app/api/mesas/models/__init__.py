from .model_mesa import MesaModel, MesaHistoricoModel, StatusMesa

__all__ = ["MesaModel", "MesaHistoricoModel", "StatusMesa"]
