# tests/fake_store.py


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.closed = False

    def execute(self, sql, params):
        if self.conn.fail_on is not None and len(self.conn.executed) == self.conn.fail_on:
            raise RuntimeError("simulated insert failure")
        self.conn.executed.append((sql, params))

    def close(self):
        self.closed = True


class FakeConnection:
    """
    Minimal DB-API connection double.
    Records statements and how the transaction ended.
    """

    def __init__(self, fail_on: int | None = None, fail_commit: bool = False):
        self.fail_on = fail_on
        self.fail_commit = fail_commit
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False
        self.cursors = []

    def cursor(self):
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur

    def commit(self):
        if self.fail_commit:
            raise RuntimeError("simulated commit failure")
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class BrokenConnection(FakeConnection):
    """Connection whose link dropped before the batch started."""

    def cursor(self):
        raise RuntimeError("connection already closed")
