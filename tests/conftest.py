import os
import sys

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from backend.client import BackendError, PostgrestError  # noqa: E402


class FakeContext:
    """Records what a servicer sets on its grpc.ServicerContext."""

    def __init__(self):
        self.code = None
        self.details = None
        self.trailing_metadata = ()

    def set_code(self, code):
        self.code = code

    def set_details(self, details):
        self.details = details

    def set_trailing_metadata(self, metadata):
        self.trailing_metadata = metadata


class FakeQuery:
    """Chainable stand-in for a postgrest request builder."""

    def __init__(self, table):
        self.table = table
        self.operation = None
        self.payload = None
        self.filters = []
        self.bounds = None

    def select(self, columns):
        self.operation = "select"
        self.payload = columns
        return self

    def update(self, patch):
        self.operation = "update"
        self.payload = patch
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def matches(self, row):
        return all(str(row.get(column)) == str(value) for column, value in self.filters)


class FakeBackend:
    """In-memory BackendClient: tables of dict rows plus scripted procedures.

    A procedure response may be a value, a callable taking the params, or an
    exception instance to raise.
    """

    def __init__(self):
        self.tables = {}
        self.responses = {}
        self.calls = []
        self.queries = []
        self.execute_error = None

    def call(self, procedure, params):
        name = getattr(procedure, "value", procedure)
        self.calls.append((name, params))
        response = self.responses.get(name)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params)
        return response

    def query(self, table):
        query = FakeQuery(table)
        self.queries.append(query)
        return query

    def execute(self, builder):
        if self.execute_error is not None:
            raise self.execute_error
        rows = self.tables.setdefault(builder.table, [])
        matched = [row for row in rows if builder.matches(row)]
        if builder.operation == "update":
            for row in matched:
                row.update(builder.payload)
        elif builder.operation == "delete":
            self.tables[builder.table] = [row for row in rows if row not in matched]
        if builder.bounds is not None:
            start, end = builder.bounds
            matched = matched[start:end + 1]
        return [dict(row) for row in matched]

    @property
    def call_count(self):
        return len(self.calls) + len(self.queries)


def rejection(code="P0001", message="rejected"):
    return BackendError(PostgrestError(code=code, message=message))


@pytest.fixture
def context():
    return FakeContext()


@pytest.fixture
def backend():
    return FakeBackend()
