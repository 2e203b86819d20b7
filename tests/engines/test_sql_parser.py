"""Unit tests for engines.sql.parser: named-parameter rewriting and classification."""

import pytest

from rds_data_api.engines.sql.parser import is_read, rewrite_named_parameters


class TestRewriteNamedParameters:
    def test_no_parameters_returns_input_unchanged(self):
        sql = "SELECT * FROM t WHERE a = 'x' -- trailing\n"
        assert rewrite_named_parameters(sql) == (sql, [])

    def test_single_parameter(self):
        sql, names = rewrite_named_parameters("SELECT * FROM t WHERE id = :id")
        assert sql == "SELECT * FROM t WHERE id = ?"
        assert names == ["id"]

    def test_colon_in_single_quotes_is_not_a_parameter(self):
        sql, names = rewrite_named_parameters(
            "SELECT ':notparam' AS s, col FROM t WHERE a = :a"
        )
        assert sql == "SELECT ':notparam' AS s, col FROM t WHERE a = ?"
        assert names == ["a"]

    def test_repeated_name_kept_per_occurrence(self):
        sql, names = rewrite_named_parameters(
            "SELECT * FROM t WHERE status = :status OR backup = :status"
        )
        assert sql == "SELECT * FROM t WHERE status = ? OR backup = ?"
        assert names == ["status", "status"]

    def test_colon_without_identifier_start(self):
        sql = "SELECT ':' AS c, :1 AS x"
        assert rewrite_named_parameters(sql) == (sql, [])

    def test_trailing_colon(self):
        assert rewrite_named_parameters("SELECT a:") == ("SELECT a:", [])

    def test_non_ascii_letter_does_not_start_a_name(self):
        assert rewrite_named_parameters("SELECT :é") == ("SELECT :é", [])

    def test_names_with_underscore_and_digits(self):
        sql, names = rewrite_named_parameters("WHERE a = :user_id2 AND b = :_x")
        assert sql == "WHERE a = ? AND b = ?"
        assert names == ["user_id2", "_x"]

    def test_name_ends_at_punctuation(self):
        sql, names = rewrite_named_parameters(
            "INSERT INTO users (name, email) VALUES (:name,:email)"
        )
        assert sql == "INSERT INTO users (name, email) VALUES (?,?)"
        assert names == ["name", "email"]

    def test_double_quotes(self):
        sql, names = rewrite_named_parameters('SELECT ":x" , :y')
        assert sql == 'SELECT ":x" , ?'
        assert names == ["y"]

    def test_backticks(self):
        sql, names = rewrite_named_parameters("SELECT `a:b` FROM t WHERE c = :c")
        assert sql == "SELECT `a:b` FROM t WHERE c = ?"
        assert names == ["c"]

    def test_backslash_does_not_escape_inside_backticks(self):
        sql, names = rewrite_named_parameters("SELECT `a\\` , :p")
        assert sql == "SELECT `a\\` , ?"
        assert names == ["p"]

    def test_backslash_escapes_quote_inside_string(self):
        sql = "SELECT 'a\\' , :p'"
        assert rewrite_named_parameters(sql) == (sql, [])

    def test_escaped_quote_then_parameter(self):
        sql, names = rewrite_named_parameters(
            "SELECT * FROM t WHERE d = 'It\\'s :x' AND id = :id"
        )
        assert sql == "SELECT * FROM t WHERE d = 'It\\'s :x' AND id = ?"
        assert names == ["id"]

    def test_doubled_delimiter_stays_quoted(self):
        sql, names = rewrite_named_parameters("SELECT 'it''s :x' , :y")
        assert sql == "SELECT 'it''s :x' , ?"
        assert names == ["y"]

    def test_other_quote_inside_string(self):
        sql, names = rewrite_named_parameters(
            "SELECT * FROM t WHERE note = \"He said, 'Hi :there'\" AND id = :id"
        )
        assert sql == "SELECT * FROM t WHERE note = \"He said, 'Hi :there'\" AND id = ?"
        assert names == ["id"]

    def test_dash_dash_comment(self):
        sql, names = rewrite_named_parameters("SELECT 1 -- :x\nWHERE a = :a")
        assert sql == "SELECT 1 -- :x\nWHERE a = ?"
        assert names == ["a"]

    def test_hash_comment(self):
        sql, names = rewrite_named_parameters("SELECT 1 # :x\n, :a")
        assert sql == "SELECT 1 # :x\n, ?"
        assert names == ["a"]

    def test_line_comment_without_newline(self):
        sql = "SELECT 1 -- :x"
        assert rewrite_named_parameters(sql) == (sql, [])

    def test_block_comment(self):
        sql, names = rewrite_named_parameters("SELECT /* :x\n :y */ :a")
        assert sql == "SELECT /* :x\n :y */ ?"
        assert names == ["a"]

    def test_quote_inside_comment_does_not_open_string(self):
        sql, names = rewrite_named_parameters("SELECT 1 /* it's */ , :a -- don't\n, :b")
        assert sql == "SELECT 1 /* it's */ , ? -- don't\n, ?"
        assert names == ["a", "b"]

    def test_comment_markers_inside_strings(self):
        sql, names = rewrite_named_parameters("SELECT '-- no', '/* no', '#no', :a")
        assert sql == "SELECT '-- no', '/* no', '#no', ?"
        assert names == ["a"]

    def test_unterminated_string(self):
        sql = "SELECT 'abc :x"
        assert rewrite_named_parameters(sql) == (sql, [])

    def test_whitespace_and_case_preserved(self):
        sql, names = rewrite_named_parameters("  select\t*\n  FROM   t WHERE id=:id  ")
        assert sql == "  select\t*\n  FROM   t WHERE id=?  "
        assert names == ["id"]

    def test_literal_prefixes_preserved(self):
        sql, names = rewrite_named_parameters(
            "SELECT x'4D7953514C', b'0101', _utf8mb4'é' , :a"
        )
        assert sql == "SELECT x'4D7953514C', b'0101', _utf8mb4'é' , ?"
        assert names == ["a"]


class TestFormatParamstyle:
    def test_placeholder_is_percent_s(self):
        sql, names = rewrite_named_parameters(
            "SELECT * FROM t WHERE id = :id", paramstyle="format"
        )
        assert sql == "SELECT * FROM t WHERE id = %s"
        assert names == ["id"]

    def test_literal_percent_is_doubled_everywhere(self):
        sql, _ = rewrite_named_parameters(
            "SELECT 5 % 2, 'a%' /* 10% */ FROM t WHERE n LIKE :p",
            paramstyle="format",
        )
        assert sql == "SELECT 5 %% 2, 'a%%' /* 10%% */ FROM t WHERE n LIKE %s"

    def test_interpolation_reproduces_qmark_text(self):
        original = "SELECT * FROM t WHERE name LIKE 'a%' AND id = :id AND x = :x"
        qmark_sql, names = rewrite_named_parameters(original)
        format_sql, _ = rewrite_named_parameters(original, paramstyle="format")
        assert format_sql % tuple("?" for _ in names) == qmark_sql

    def test_unknown_paramstyle(self):
        with pytest.raises(ValueError, match="paramstyle"):
            rewrite_named_parameters("SELECT 1", paramstyle="named")


class TestIsRead:
    @pytest.mark.parametrize(
        "sql",
        ["SELECT 1", "  select 1", "\n\tSeLeCt * FROM t", "select*from t", "SELECT(1)"],
    )
    def test_select_is_read(self, sql):
        assert is_read(sql) is True

    @pytest.mark.parametrize(
        "sql",
        [
            "UPDATE t SET x=1",
            "INSERT INTO t SELECT * FROM u",
            "DELETE FROM t",
            "SELECTED",
            "WITH c AS (SELECT 1) SELECT * FROM c",
            "(SELECT 1)",
            "",
            "   ",
        ],
    )
    def test_other_statements_are_writes(self, sql):
        assert is_read(sql) is False
