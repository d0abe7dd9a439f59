from sqlalchemy import create_engine

from searchable.services.dialect import DialectPolicy


class TestDialectPolicy:
    def test_mysql(self):
        policy = DialectPolicy.for_name("mysql")
        assert policy.like_operator == "LIKE"
        assert policy.having_uses_alias is True
        assert policy.binding_copies == 1
        assert policy.quote_column("users.name") == "`users`.`name`"

    def test_postgres_aliases(self):
        for name in ("pgsql", "postgresql", "postgres"):
            policy = DialectPolicy.for_name(name)
            assert policy.like_operator == "ILIKE"
            assert policy.quote_column("users.name") == "users.name"
            assert policy.binding_copies == 2

    def test_sqlsrv_groups_all_columns(self):
        policy = DialectPolicy.for_name("sqlsrv")
        assert policy.group_by_all_columns is True
        assert policy.quote_column("users.name") == "[users].[name]"
        assert policy.order_in_subquery is False

    def test_unknown_driver_defaults(self):
        policy = DialectPolicy.for_name("firebird")
        assert policy.like_operator == "LIKE"
        assert policy.quote_column("name") == "`name`"
        assert policy.having_uses_alias is False
        assert policy.binding_copies == 2
        assert policy.group_by_all_columns is False
        assert policy.order_in_subquery is True

    def test_missing_name_defaults(self):
        assert DialectPolicy.for_name(None).name == "default"

    def test_for_bind(self):
        engine = create_engine("sqlite://")
        try:
            assert DialectPolicy.for_bind(engine).name == "sqlite"
        finally:
            engine.dispose()
