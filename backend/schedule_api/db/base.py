from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Register every model on Base.metadata.
import schedule_api.models  # noqa: E402,F401
