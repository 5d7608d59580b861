from app.database.db_connection import engine, SessionLocal
from app.database.domain.registry import get_registry
from app.utils.logger import logger


def importar_models():
    # A ordem de import define a ordem de registro (e de criação das tabelas)
    import app.api.cadastros.database.initializer  # noqa: F401
    import app.api.catalogo.database.initializer  # noqa: F401
    import app.api.mesas.database.initializer  # noqa: F401
    import app.api.pedidos.database.initializer  # noqa: F401
    import app.api.estoque.database.initializer  # noqa: F401
    import app.api.notifications.database.initializer  # noqa: F401
    import app.api.configuracoes.database.initializer  # noqa: F401
    registry = get_registry()
    logger.info(f"📦 {registry.count()} domínios registrados: {', '.join(registry.nomes())}")


def inicializar_banco():
    logger.info("🚀 Iniciando processo de inicialização do banco de dados...")
    importar_models()

    db = SessionLocal()
    try:
        for initializer in get_registry().get_all():
            initializer.initialize(engine, db)
        db.commit()
        logger.info("✅ Banco inicializado com sucesso.")
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Erro durante inicialização do banco: {e}", exc_info=True)
        raise
    finally:
        db.close()
