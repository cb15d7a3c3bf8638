"""Database models for the person service."""

from .base import Base
from .key_value import KeyValue
from .person import Person
from .person_attribute import PersonAttribute
from .request_log import RequestLog

__all__ = ["Base", "KeyValue", "Person", "PersonAttribute", "RequestLog"]
