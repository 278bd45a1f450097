"""Custom SQLAlchemy types for structured values stored in text columns."""

from __future__ import annotations

import json

from sqlalchemy.types import Text, TypeDecorator


class JSONEncodedText(TypeDecorator):
    """Serialize on write, deserialize on read.

    ``empty`` is what a NULL or blank column reads back as, so a record
    written without the field still reads as an empty container.
    """

    impl = Text
    cache_ok = True
    empty: type = dict

    def process_bind_param(self, value, dialect):
        if value is None:
            value = self.empty()
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None or value == "":
            return self.empty()
        try:
            return json.loads(value)
        except ValueError:
            return self.empty()


class JSONEncodedList(JSONEncodedText):
    """JSON array in a text column (tags, affected agents)."""

    empty = list


class JSONEncodedDict(JSONEncodedText):
    """JSON object in a text column (campaign results)."""

    empty = dict
