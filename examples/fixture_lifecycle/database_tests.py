"""Shows setup/teardown ordering, soft checks and failure isolation."""
import os

from suitekit import Fixture, TestSuite, check, enabled_if, message, require


class InMemoryDatabase(Fixture):
    def setup(self) -> None:
        self.rows = {}

    def teardown(self) -> None:
        self.rows.clear()


database = TestSuite("database", fixture=InMemoryDatabase, tags=("db",))


@database.case()
def insert_then_read(db: InMemoryDatabase) -> None:
    db.rows["alice"] = 1
    require(db.rows.get("alice") == 1, "row was not stored")
    message(f"rows={len(db.rows)}")


@database.case()
def starts_empty(db: InMemoryDatabase) -> None:
    check(not db.rows, "previous test leaked rows")


@database.case(enabled=enabled_if(lambda: os.environ.get("RUN_SLOW") == "1"), tags=("slow",))
def bulk_insert(db: InMemoryDatabase) -> None:
    for index in range(10_000):
        db.rows[f"user{index}"] = index
    require(len(db.rows) == 10_000, "bulk insert lost rows")
