from typing import Any

from sqlalchemy.orm import as_declarative, declared_attr


@as_declarative()
class Base:
    id: Any
    __name__: str

    # Table names are the pluralized class name: Employee -> employees
    @declared_attr
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"
