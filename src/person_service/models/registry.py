"""Model registry for the person service.

Ensures every model is imported, and therefore present on ``Base.metadata``,
before the schema is created.
"""


def register_all_models():
    """Import all SQLAlchemy models so they register with the declarative base."""
    from . import Base, KeyValue, Person, PersonAttribute, RequestLog

    return {
        "Base": Base,
        "KeyValue": KeyValue,
        "Person": Person,
        "PersonAttribute": PersonAttribute,
        "RequestLog": RequestLog,
    }
