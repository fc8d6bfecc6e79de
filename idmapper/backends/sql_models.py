"""
Tables of a SQLite mapping database.
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class Datanode(SQLModel, table=True):
    """One identifier known to the database."""

    __tablename__ = "datanode"

    id: str = Field(primary_key=True)
    code: str = Field(primary_key=True)


class Link(SQLModel, table=True):
    """Puts the right identifier into the mapping group keyed by the left one."""

    __tablename__ = "link"

    row_id: Optional[int] = Field(default=None, primary_key=True)
    id_left: str = Field(index=True)
    code_left: str = Field()
    id_right: str = Field(index=True)
    code_right: str = Field()


class Attribute(SQLModel, table=True):
    """One attribute value (symbol, description, chromosome, ...) of an identifier."""

    __tablename__ = "attribute"

    row_id: Optional[int] = Field(default=None, primary_key=True)
    id: str = Field(index=True)
    code: str = Field()
    attrname: str = Field(index=True)
    attrvalue: str = Field()


class Info(SQLModel, table=True):
    """Database-level metadata, reported as capability properties."""

    __tablename__ = "info"

    key: str = Field(primary_key=True)
    value: str = Field()


MAPPER_TABLES = [Datanode.__table__, Link.__table__, Attribute.__table__, Info.__table__]
