# app/database/db_connection.py

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from ..config.settings import DATABASE_URL, DB_CONFIG, DB_SSL_MODE, DB_ECHO

# Base única para todos os models
Base = declarative_base()

logger = logging.getLogger(__name__)


def build_connection_string() -> str:
    """Usa DATABASE_URL quando informada; senão monta a URL do Postgres a partir de DB_CONFIG."""
    if DATABASE_URL:
        return DATABASE_URL

    # Validação mínima de config
    missing = [k for k in ('database', 'user', 'password', 'host', 'port') if not DB_CONFIG.get(k)]
    if missing:
        raise RuntimeError(f"Configuração do banco inválida, faltando variáveis: {', '.join(missing)}")

    # Monta a URL de conexão (com SSL opcional via query)
    ssl_query = f"?sslmode={DB_SSL_MODE}" if DB_SSL_MODE else ""
    return (
        f"postgresql://{DB_CONFIG['user']}:{DB_CONFIG['password']}"
        f"@{DB_CONFIG['host']}:{DB_CONFIG['port']}/{DB_CONFIG['database']}{ssl_query}"
    )


def build_engine(connection_string: str):
    url = make_url(connection_string)

    if url.get_backend_name() == "sqlite":
        # SQLite em memória precisa de uma única conexão compartilhada entre threads
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(connection_string, echo=DB_ECHO, **kwargs)

        # SQLite só respeita FOREIGN KEY (ON DELETE RESTRICT) com o pragma ligado
        @event.listens_for(sqlite_engine, "connect")
        def _enable_sqlite_fk(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    return create_engine(
        connection_string,
        echo=DB_ECHO,
        pool_pre_ping=True,
        connect_args={"options": "-c timezone=UTC"},
    )


engine = build_engine(build_connection_string())

# Configura o sessionmaker
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# Dependency para FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
