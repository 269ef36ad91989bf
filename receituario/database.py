"""
Configuração de Banco de Dados e Gerenciamento de Sessão

Padrão de Gerenciamento de Transação:
- Este módulo é o ÚNICO lugar que faz commit de transações (via transaction())
- Repositórios usam db.add()/db.execute() para preparar mudanças e db.flush()
  para escrever na transação aberta
- transaction() é reentrante: um bloco interno participa da transação externa
  e apenas o bloco mais externo faz commit ou rollback
- get_db() apenas fornece e fecha a sessão; nada é commitado implicitamente

O engine e a fábrica de sessões são criados pela aplicação (create_app) e
guardados em app.state, nunca como singletons do módulo.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from receituario.services.exceptions import StoreError

logger = logging.getLogger(__name__)

_TRANSACTION_KEY = "receituario.transaction_open"


class Base(DeclarativeBase):
    """Classe base para todos os modelos de banco de dados"""

    pass


def create_db_engine(
    database_url: str, busy_timeout: float = 15.0, echo: bool = False
) -> Engine:
    """
    Cria o engine SQLAlchemy com as opções adequadas ao dialeto.

    SQLite precisa de check_same_thread=False para uso entre threads e de um
    timeout de espera pelo lock de escrita. PostgreSQL usa pool com pre-ping.
    """
    engine_args: dict[str, Any] = {"echo": echo}

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        engine_args["connect_args"] = {
            "check_same_thread": False,
            "timeout": busy_timeout,
        }
    elif url.get_backend_name() == "postgresql":
        engine_args["pool_pre_ping"] = True
        engine_args["pool_size"] = 10
        engine_args["max_overflow"] = 20
        engine_args["pool_recycle"] = 3600
    else:
        engine_args["pool_pre_ping"] = True

    return create_engine(database_url, **engine_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        autocommit=False,
        autoflush=False,  # Manual flush for better control over transaction boundaries
        expire_on_commit=False,
        bind=engine,
    )


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Abre um escopo transacional sobre a sessão.

    - Commit ao final do bloco mais externo
    - Rollback completo em qualquer erro, antes de propagar
    - Erros do SQLAlchemy são convertidos em StoreError
    - Blocos aninhados apenas participam da transação já aberta
    """
    if db.info.get(_TRANSACTION_KEY):
        yield db
        return

    db.info[_TRANSACTION_KEY] = True
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Transaction rolled back: %s", e)
        raise StoreError(str(e)) from e
    except Exception:
        db.rollback()
        raise
    finally:
        db.info.pop(_TRANSACTION_KEY, None)


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependência para obter sessão do banco de dados.

    A sessão vem da fábrica registrada em app.state. Fechar a sessão descarta
    qualquer transação que não tenha passado por transaction().
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """
    Cria as tabelas e a linha única do contador (valor 0) se ausente.

    Para SQLite em arquivo, cria também o diretório do banco.
    """
    from receituario.models.counter import COUNTER_ID, Counter

    database = engine.url.database
    if engine.url.get_backend_name() == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)

    Base.metadata.create_all(bind=engine)

    with Session(engine) as db:
        if db.get(Counter, COUNTER_ID) is None:
            db.add(Counter(id=COUNTER_ID, last_number=0))
            db.commit()
            logger.info("Counter row created")


def close_db(engine: Engine) -> None:
    """Fecha conexões do banco de dados"""
    engine.dispose()
