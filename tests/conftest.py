from copy import deepcopy

import pytest
from botocore.exceptions import ClientError, NoCredentialsError

from app.db import dynamo


class FakeBudgetsTable:
    """In-memory stand-in for the boto3 budgets Table."""

    def __init__(self, page_size=None, fail_with=None, error=None):
        self.items = {}
        self.page_size = page_size
        self.fail_with = fail_with
        self.error = error
        self.scan_calls = []

    def _maybe_fail(self, operation):
        if self.error is not None:
            raise self.error
        if self.fail_with:
            raise ClientError(
                {"Error": {"Code": self.fail_with, "Message": f"{operation} rejected"}},
                operation,
            )

    def put_item(self, Item):
        self._maybe_fail("PutItem")
        self.items[Item["budget_id"]] = deepcopy(Item)
        return {}

    def get_item(self, Key):
        self._maybe_fail("GetItem")
        item = self.items.get(Key["budget_id"])
        return {"Item": deepcopy(item)} if item else {}

    def scan(self, **kwargs):
        self._maybe_fail("Scan")
        self.scan_calls.append(kwargs)
        keys = sorted(self.items)
        start = kwargs.get("ExclusiveStartKey")
        if start:
            keys = keys[keys.index(start["budget_id"]) + 1:]
        limit = kwargs.get("Limit") or self.page_size
        page = keys[:limit] if limit else keys
        response = {"Items": [deepcopy(self.items[k]) for k in page]}
        if limit and len(keys) > limit:
            response["LastEvaluatedKey"] = {"budget_id": page[-1]}
        return response


@pytest.fixture
def budgets_table(monkeypatch):
    table = FakeBudgetsTable()
    monkeypatch.setattr(dynamo, "budgets_table", table)
    return table


@pytest.fixture
def failing_budgets_table(monkeypatch):
    table = FakeBudgetsTable(fail_with="ResourceNotFoundException")
    monkeypatch.setattr(dynamo, "budgets_table", table)
    return table


@pytest.fixture
def paged_budgets_table(monkeypatch):
    table = FakeBudgetsTable(page_size=2)
    monkeypatch.setattr(dynamo, "budgets_table", table)
    return table


@pytest.fixture
def offline_budgets_table(monkeypatch):
    table = FakeBudgetsTable(error=NoCredentialsError())
    monkeypatch.setattr(dynamo, "budgets_table", table)
    return table
