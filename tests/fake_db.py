"""
tests/fake_db.py
----------------
In-memory stand-in for a psycopg2 connection.

Understands the small SQL dialect the mappers emit (single-table SELECT /
INSERT / UPDATE / DELETE, COUNT(*), currval), assigns ids from sequences the
way the insert triggers do, enforces foreign keys, supports commit /
rollback, and records every statement so tests can count queries.
"""

import copy
import re
from typing import Optional

import psycopg2

COLUMNS = {
    "cities": ["id", "zip_code", "name"],
    "restaurant_types": ["id", "label", "description"],
    "evaluation_criteria": ["id", "name", "description"],
    "restaurants": ["id", "name", "street", "description", "website", "type_id", "city_id"],
    "basic_evaluations": ["id", "appreciation", "visit_date", "ip_address", "restaurant_id"],
    "complete_evaluations": ["id", "visit_date", "comment", "username", "restaurant_id"],
    "grades": ["id", "grade", "evaluation_id", "criteria_id"],
}

SEQUENCES = {
    "cities": "seq_cities",
    "restaurant_types": "seq_restaurant_types",
    "evaluation_criteria": "seq_evaluation_criteria",
    "restaurants": "seq_restaurants",
    "basic_evaluations": "seq_evaluations",
    "complete_evaluations": "seq_evaluations",
    "grades": "seq_grades",
}

FOREIGN_KEYS = {
    "restaurants": {"type_id": "restaurant_types", "city_id": "cities"},
    "basic_evaluations": {"restaurant_id": "restaurants"},
    "complete_evaluations": {"restaurant_id": "restaurants"},
    "grades": {"evaluation_id": "complete_evaluations", "criteria_id": "evaluation_criteria"},
}

_CURRVAL = re.compile(r"^SELECT currval\('(\w+)'\)$")
_COUNT = re.compile(r"^SELECT COUNT\(\*\) FROM (\w+)$")
_EXISTS = re.compile(r"^SELECT 1 FROM (\w+) WHERE id = %s$")
_INSERT = re.compile(r"^INSERT INTO (\w+) \(([\w, ]+)\) VALUES \(([%s, ]+)\)$")
_UPDATE = re.compile(r"^UPDATE (\w+) SET (.+) WHERE id = %s$")
_DELETE = re.compile(r"^DELETE FROM (\w+) WHERE (\w+) = %s$")
_SELECT = re.compile(
    r"^SELECT (?P<columns>[\w, ]+) FROM (?P<table>\w+)"
    r"(?: WHERE (?:(?P<eq>\w+) = %s|UPPER\((?P<upper>\w+)\) (?P<op>LIKE|=) %s(?: ESCAPE '(?P<escape>\\)')?))?"
    r"(?: ORDER BY (?P<order>\w+)(?P<desc> DESC)?)?$"
)


def normalize(sql: str) -> str:
    return " ".join(sql.split()).rstrip(";").strip()


class FakeDatabase:
    """Tables as lists of dict rows, plus sequences and a statement log."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {name: [] for name in COLUMNS}
        self.sequences: dict[str, int] = {seq: 0 for seq in SEQUENCES.values()}
        self.session_currvals: dict[str, int] = {}
        self._committed = copy.deepcopy(self.tables)
        self.statements: list[str] = []
        self.commits = 0
        self.rollbacks = 0
        self._fail_on: Optional[str] = None

    # ── TEST HELPERS ──────────────────────────────────────

    def fail_next(self, fragment: str) -> None:
        """Make the next statement containing `fragment` raise OperationalError."""
        self._fail_on = fragment

    def rows(self, table: str) -> list[dict]:
        return self.tables[table]

    def selects(self) -> list[str]:
        return [s for s in self.statements if s.startswith("SELECT")]

    # ── TRANSACTIONS ──────────────────────────────────────

    def commit(self) -> None:
        self._committed = copy.deepcopy(self.tables)
        self.commits += 1

    def rollback(self) -> None:
        self.tables = copy.deepcopy(self._committed)
        self.rollbacks += 1

    # ── EXECUTION ─────────────────────────────────────────

    def execute(self, sql: str, params: tuple) -> tuple[list[tuple], int]:
        statement = normalize(sql)
        self.statements.append(statement)
        params = tuple(params or ())
        assert statement.count("%s") == len(params), f"parameter mismatch in {statement!r}"

        if self._fail_on is not None and self._fail_on in statement:
            self._fail_on = None
            raise psycopg2.OperationalError("simulated failure")

        if m := _CURRVAL.match(statement):
            return self._currval(m.group(1))
        if m := _COUNT.match(statement):
            return [(len(self.tables[m.group(1)]),)], 1
        if m := _EXISTS.match(statement):
            found = any(r["id"] == params[0] for r in self.tables[m.group(1)])
            return ([(1,)] if found else []), int(found)
        if m := _INSERT.match(statement):
            return self._insert(m.group(1), _split(m.group(2)), params)
        if m := _UPDATE.match(statement):
            columns = [assignment.split(" = ")[0] for assignment in m.group(2).split(", ")]
            return self._update(m.group(1), columns, params)
        if m := _DELETE.match(statement):
            return self._delete(m.group(1), m.group(2), params[0])
        if m := _SELECT.match(statement):
            return self._select(m, params)
        raise AssertionError(f"unsupported statement: {statement!r}")

    def _currval(self, sequence: str) -> tuple[list[tuple], int]:
        if sequence not in self.session_currvals:
            raise psycopg2.OperationalError(
                f'currval of sequence "{sequence}" is not yet defined in this session'
            )
        return [(self.session_currvals[sequence],)], 1

    def _insert(self, table: str, columns: list[str], params: tuple) -> tuple[list, int]:
        row = dict(zip(columns, params))
        self._check_references(table, row)
        sequence = SEQUENCES[table]
        self.sequences[sequence] += 1
        self.session_currvals[sequence] = self.sequences[sequence]
        row["id"] = self.sequences[sequence]
        self.tables[table].append({c: row.get(c) for c in COLUMNS[table]})
        return [], 1

    def _update(self, table: str, columns: list[str], params: tuple) -> tuple[list, int]:
        *values, row_id = params
        changes = dict(zip(columns, values))
        self._check_references(table, changes)
        count = 0
        for row in self.tables[table]:
            if row["id"] == row_id:
                row.update(changes)
                count += 1
        return [], count

    def _delete(self, table: str, column: str, value) -> tuple[list, int]:
        doomed = [r for r in self.tables[table] if r[column] == value]
        for child, keys in FOREIGN_KEYS.items():
            for fk_column, parent in keys.items():
                if parent != table:
                    continue
                doomed_ids = {r["id"] for r in doomed}
                if any(r[fk_column] in doomed_ids for r in self.tables[child]):
                    raise psycopg2.IntegrityError(
                        f"update or delete on table \"{table}\" violates foreign key "
                        f"constraint on table \"{child}\""
                    )
        self.tables[table] = [r for r in self.tables[table] if r[column] != value]
        return [], len(doomed)

    def _select(self, m: re.Match, params: tuple) -> tuple[list[tuple], int]:
        columns = _split(m["columns"])
        rows = list(self.tables[m["table"]])
        if m["eq"]:
            rows = [r for r in rows if r[m["eq"]] == params[0]]
        elif m["upper"]:
            column = m["upper"]
            if m["op"] == "LIKE":
                pattern = _like_to_regex(params[0], m["escape"])
                rows = [r for r in rows if pattern.fullmatch((r[column] or "").upper())]
            else:
                rows = [r for r in rows if (r[column] or "").upper() == params[0]]
        if m["order"]:
            key = m["order"]
            rows.sort(key=lambda r: (r[key] is None, r[key]), reverse=bool(m["desc"]))
        result = [tuple(r[c] for c in columns) for r in rows]
        return result, len(result)

    def _check_references(self, table: str, values: dict) -> None:
        for column, parent in FOREIGN_KEYS.get(table, {}).items():
            if column in values and not any(r["id"] == values[column] for r in self.tables[parent]):
                raise psycopg2.IntegrityError(
                    f"insert or update on table \"{table}\" violates foreign key constraint ({column})"
                )


def _split(columns: str) -> list[str]:
    return [c.strip() for c in columns.split(",")]


def _like_to_regex(pattern: str, escape: Optional[str] = None) -> re.Pattern:
    parts = []
    chars = iter(pattern)
    for char in chars:
        if escape is not None and char == escape:
            parts.append(re.escape(next(chars, "")))
        elif char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


class FakeCursor:
    def __init__(self, db: FakeDatabase):
        self.db = db
        self._rows: list[tuple] = []
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql: str, params=None) -> None:
        self._rows, self.rowcount = self.db.execute(sql, params)

    def fetchone(self) -> Optional[tuple]:
        return self._rows[0] if self._rows else None

    def fetchall(self) -> list[tuple]:
        return list(self._rows)


class FakeConnection:
    """Mimics the parts of a psycopg2 connection the application uses."""

    def __init__(self, db: FakeDatabase):
        self.db = db
        self.closed = 0
        self.autocommit = True

    def cursor(self) -> FakeCursor:
        return FakeCursor(self.db)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.closed = 1


class FakeProvider:
    """ConnectionProvider replacement handing out one FakeConnection."""

    def __init__(self, db: FakeDatabase):
        self.connection = FakeConnection(db)

    def get_connection(self) -> FakeConnection:
        return self.connection

    def close(self) -> None:
        self.connection.close()
