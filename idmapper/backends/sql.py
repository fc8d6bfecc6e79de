"""
SQLite implementation of the mapper interface.
"""

from pathlib import Path
from typing import Any, Optional, cast

from sqlalchemy import and_, func, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import aliased
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, col, create_engine, select

from idschema.capabilities import MapperCapabilities
from idschema.namespace import Namespace
from idschema.xref import Xref
from idmapper.backends.sql_models import MAPPER_TABLES, Attribute, Datanode, Info, Link
from idmapper.config import SqlConfig
from idmapper.exceptions import BackendUnavailableError, QueryFailureError
from idmapper.interfaces import IDMapperInterface
from idmapper.logging import setup_logging
from idmapper.registry import NamespaceRegistry

IN_MEMORY = ":memory:"


class SqlIDMapper(IDMapperInterface):
    """
    Mapper backed by a SQLite database with datanode, link, attribute and info tables.

    Mapping semantics are the same as InMemoryIDMapper's. System codes read
    from the database are resolved through the registry; codes the registry
    has never seen are registered on the fly with the code as display name.
    """

    def __init__(
        self,
        db_path: str | Path,
        registry: NamespaceRegistry,
        config: Optional[SqlConfig] = None,
        create: bool = False,
        name: Optional[str] = None,
    ):
        self.db_path = str(db_path)
        self.registry = registry
        self.config = config or SqlConfig()
        self._name = name or (self.db_path if self.db_path == IN_MEMORY else Path(self.db_path).stem)
        self.logger = setup_logging()

        if self.db_path != IN_MEMORY and not create and not Path(self.db_path).exists():
            raise BackendUnavailableError(f"Mapping database {self.db_path} does not exist")

        connect_args: dict[str, Any] = {"timeout": self.config.query_timeout}
        engine_args: dict[str, Any] = {"echo": self.config.echo, "connect_args": connect_args}
        if self.db_path == IN_MEMORY:
            # One shared connection, or every session would see a fresh empty database
            connect_args["check_same_thread"] = False
            engine_args["poolclass"] = StaticPool
        try:
            self.engine = create_engine(f"sqlite:///{self.db_path}", **engine_args)
            if create:
                SQLModel.metadata.create_all(self.engine, tables=MAPPER_TABLES)
            elif not inspect(self.engine).has_table(Link.__tablename__):
                self.engine.dispose()
                raise BackendUnavailableError(f"{self.db_path} is not a mapping database")
        except SQLAlchemyError as e:
            raise BackendUnavailableError(f"Cannot open mapping database {self.db_path}: {e}") from e
        self._session: Optional[Session] = Session(self.engine)
        self.logger.debug({"message": "Opened mapping database", "db_path": self.db_path, "created": create})

    # --- helpers ------------------------------------------------------------

    @property
    def session(self) -> Session:
        self._ensure_connected()
        return cast(Session, self._session)

    def _all(self, statement) -> list:
        session = self.session
        try:
            return list(session.exec(statement).all())
        except SQLAlchemyError as e:
            session.rollback()
            raise QueryFailureError(f"Query on {self.db_path} failed: {e}") from e

    def _write(self, *rows: SQLModel) -> None:
        session = self.session
        try:
            for row in rows:
                session.merge(row)
        except SQLAlchemyError as e:
            session.rollback()
            raise QueryFailureError(f"Write to {self.db_path} failed: {e}") from e

    def _xref(self, identifier: str, code: str) -> Xref:
        return Xref(id=identifier, namespace=self.registry.register(code, code))

    # --- population ---------------------------------------------------------

    def add_datanode(self, xref: Xref) -> None:
        self._write(Datanode(id=xref.id, code=xref.namespace.code))

    def _has_link(self, left: Xref, right: Xref) -> bool:
        statement = select(Link.row_id).where(
            Link.id_left == left.id,
            Link.code_left == left.namespace.code,
            Link.id_right == right.id,
            Link.code_right == right.namespace.code,
        )
        return bool(self._all(statement))

    def add_link(self, left: Xref, right: Xref) -> None:
        """Put ``right`` into the group keyed by ``left``. Duplicate links are ignored."""
        self.add_datanode(left)
        self.add_datanode(right)
        for dest in (left, right):
            if not self._has_link(left, dest):
                self.session.add(
                    Link(
                        id_left=left.id,
                        code_left=left.namespace.code,
                        id_right=dest.id,
                        code_right=dest.namespace.code,
                    )
                )
                # Flush so the self link gets the lower row_id
                self.session.flush()

    def _has_attribute(self, xref: Xref, name: str, value: str) -> bool:
        statement = select(Attribute.row_id).where(
            Attribute.id == xref.id,
            Attribute.code == xref.namespace.code,
            Attribute.attrname == name,
            Attribute.attrvalue == value,
        )
        return bool(self._all(statement))

    def add_attribute(self, xref: Xref, name: str, value: str) -> None:
        """Record one attribute value. Repeating the same value is ignored."""
        self.add_datanode(xref)
        if not self._has_attribute(xref, name, value):
            self.session.add(Attribute(id=xref.id, code=xref.namespace.code, attrname=name, attrvalue=value))
            self.session.flush()

    def set_info(self, key: str, value: str) -> None:
        self._write(Info(key=key, value=value))

    def commit(self) -> None:
        session = self.session
        try:
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise QueryFailureError(f"Commit to {self.db_path} failed: {e}") from e

    def gene_count(self) -> int:
        """Number of rows in the datanode table."""
        return self._all(select(func.count()).select_from(Datanode))[0]

    # --- contract -----------------------------------------------------------

    def is_connected(self) -> bool:
        return self._session is not None

    def get_name(self) -> str:
        return self._name

    def close(self) -> None:
        """Close the session and release the engine.

        The mapper is disconnected afterwards even if closing the session
        fails; the failure is then raised as QueryFailureError.
        """
        session, self._session = self._session, None
        if session is None:
            self.logger.debug({"message": "Mapping database already closed", "db_path": self.db_path})
            return
        try:
            session.close()
        except SQLAlchemyError as e:
            raise QueryFailureError(f"Closing {self.db_path} failed: {e}") from e
        finally:
            self.engine.dispose()

    def exists(self, xref: Xref) -> bool:
        statement = select(Datanode).where(Datanode.id == xref.id, Datanode.code == xref.namespace.code)
        return bool(self._all(statement))

    def map_to(self, xref: Xref, target: Optional[Namespace] = None) -> list[Xref]:
        src = aliased(Link)
        dest = aliased(Link)
        statement = (
            select(dest.id_right, dest.code_right)
            .select_from(dest)
            .join(src, and_(src.id_left == dest.id_left, src.code_left == dest.code_left))
            .where(src.id_right == xref.id, src.code_right == xref.namespace.code)
            .order_by(dest.row_id)
        )
        if target is not None:
            statement = statement.where(dest.code_right == target.code)
        result: dict[Xref, None] = {}
        for identifier, code in self._all(statement):
            found = self._xref(identifier, code)
            if found != xref:
                result.setdefault(found, None)
        return list(result)

    def free_text_search(self, query: str, limit: int) -> set[Xref]:
        # SQLite's LIKE is case-insensitive for ASCII
        statement = select(Datanode).where(col(Datanode.id).contains(query, autoescape=True)).limit(limit)
        return {self._xref(row.id, row.code) for row in self._all(statement)}

    def get_attributes(self, xref: Xref, attribute: str) -> set[str]:
        statement = select(Attribute.attrvalue).where(
            Attribute.id == xref.id,
            Attribute.code == xref.namespace.code,
            Attribute.attrname == attribute,
        )
        return set(self._all(statement))

    def free_attribute_search(self, query: str, attribute: str, limit: int) -> set[Xref]:
        statement = (
            select(Attribute.id, Attribute.code)
            .where(Attribute.attrname == attribute, col(Attribute.attrvalue).contains(query, autoescape=True))
            .distinct()
            .limit(limit)
        )
        return {self._xref(identifier, code) for identifier, code in self._all(statement)}

    def get_capabilities(self) -> MapperCapabilities:
        codes = self._all(select(Datanode.code).distinct())
        namespaces = frozenset(self.registry.register(code, code) for code in codes)
        info = {row.key: row.value for row in self._all(select(Info))}
        return MapperCapabilities(
            source_namespaces=namespaces,
            target_namespaces=namespaces,
            free_search_supported=True,
            properties={"backend": "sqlite", **info},
        )
