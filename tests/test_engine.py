from dataclasses import replace

import pytest
from pydantic import ValidationError

from adapters.expression_engine import (
    DEFAULT_PRECEDENCE,
    PrecedenceTable,
    ShuntingYardEngine,
    default_precedence_table,
)
from contracts import (
    DivisionByZeroError,
    ErrorKind,
    EvaluationError,
    ExpressionSyntaxError,
    LexError,
    MissingVariableError,
)
from ports.expression_engine import ExpressionEngine


def test_engine_implements_port():
    assert isinstance(ShuntingYardEngine(), ExpressionEngine)


def test_evaluate_respects_precedence_and_grouping():
    engine = ShuntingYardEngine()

    assert engine.evaluate("2 + 3 * 4").value == 14.0
    assert engine.evaluate("(2 + 3) * 4").value == 20.0
    assert engine.evaluate("2^3^2").value == 512.0


def test_evaluate_matches_standard_precedence_on_mixed_expressions():
    engine = ShuntingYardEngine()

    assert engine.evaluate("1 + 2 * 3 - 4 / 2").value == 5.0
    assert engine.evaluate("2 * (3 + 4) ^ 2 / 7").value == 14.0
    assert engine.evaluate("10 - 4 - 3").value == 3.0
    assert engine.evaluate("64 / 4 / 2").value == 8.0
    assert engine.evaluate("-3 ^ 2").value == 9.0
    assert engine.evaluate("2 ^ -1").value == 0.5


def test_evaluate_with_variables():
    result = ShuntingYardEngine().evaluate("x^2 + y", {"x": 5, "y": 3})

    assert result.value == 28.0
    assert result.has_numeric_variables is True
    assert result.is_boolean_expression is False
    assert result.variables == {"x": 5.0, "y": 3.0}
    assert result.postfix_notation == "x 2 ^ y +"
    assert result.original_expression == "x^2 + y"


def test_evaluate_reports_only_referenced_bindings_and_leaves_input_alone():
    bindings = {"x": 1.0, "unused": 2.0}

    result = ShuntingYardEngine().evaluate("x + 1", bindings)

    assert result.variables == {"x": 1.0}
    assert bindings == {"x": 1.0, "unused": 2.0}


def test_boolean_expression_renders_true_and_false():
    engine = ShuntingYardEngine()

    result = engine.evaluate("5 > 3 and 2 < 4")
    assert result.value == 1.0
    assert result.is_boolean_expression is True
    assert str(result) == "true"
    assert result.as_bool() is True

    assert str(engine.evaluate("1 > 2")) == "false"


def test_boolean_and_arithmetic_compose():
    result = ShuntingYardEngine().evaluate("(5 > 3) + 1")

    assert result.value == 2.0
    assert result.is_boolean_expression is True
    assert result.display_value == "2"


def test_logical_operators_and_not():
    engine = ShuntingYardEngine()

    assert engine.evaluate("not 0").value == 1.0
    assert engine.evaluate("not 5 > 3").value == 0.0
    assert engine.evaluate("1 and 0 or 1").value == 1.0
    assert engine.evaluate("0 or 0").value == 0.0


def test_equality_tolerates_floating_point_drift():
    engine = ShuntingYardEngine()

    assert engine.evaluate("0.1 + 0.2 = 0.3").value == 1.0
    assert engine.evaluate("0.1 + 0.2 != 0.3").value == 0.0


def test_unicode_operators_are_normalized():
    engine = ShuntingYardEngine()

    assert engine.evaluate("6 × 7 ÷ 2").value == 21.0
    assert engine.evaluate("3 ≤ 3").value == 1.0
    assert engine.evaluate("3 ≥ 4").value == 0.0
    assert engine.evaluate("3 ≠ 3").value == 0.0
    assert engine.evaluate("6 × 7 ÷ 2").postfix_notation == "6 7 * 2 /"


def test_display_value_of_numbers():
    engine = ShuntingYardEngine()

    assert engine.evaluate("7 / 2").display_value == "3.5"
    assert engine.evaluate("1 / 3").display_value == "0.3333333333333333"
    assert engine.evaluate("2 - 5").display_value == "-3"


def test_syntax_errors():
    engine = ShuntingYardEngine()

    for expression in ["2 3", "()", "2 +", "", "(1 + 2"]:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            engine.evaluate(expression)
        assert exc_info.value.kind is ErrorKind.SYNTAX


def test_lex_error_for_unknown_character():
    with pytest.raises(LexError):
        ShuntingYardEngine().evaluate("2 # 3")


def test_division_by_zero():
    engine = ShuntingYardEngine()

    with pytest.raises(DivisionByZeroError):
        engine.evaluate("5 / 0")
    with pytest.raises(DivisionByZeroError):
        engine.evaluate("5 / (0.1 + 0.2 - 0.3)")


def test_missing_variable_names_every_missing_binding():
    engine = ShuntingYardEngine()

    with pytest.raises(MissingVariableError) as exc_info:
        engine.evaluate("x + 5")
    assert exc_info.value.names == ["x"]

    with pytest.raises(MissingVariableError) as exc_info:
        engine.evaluate("a + b + c", {"b": 1})
    assert exc_info.value.names == ["a", "c"]
    assert exc_info.value.message == "Missing values for variables: a, c"


def test_non_numeric_binding_is_rejected():
    with pytest.raises(EvaluationError, match="must be numeric"):
        ShuntingYardEngine().evaluate("x + 1", {"x": "abc"})


def test_long_flat_sum_evaluates():
    expression = " + ".join(["1"] * 5000)

    result = ShuntingYardEngine().evaluate(expression)

    assert result.value == 5000.0


def test_long_left_associative_chain_keeps_order():
    expression = "10000" + " - 1" * 5000

    assert ShuntingYardEngine().evaluate(expression).value == 5000.0


def test_deeply_nested_expression_evaluates():
    assert ShuntingYardEngine().evaluate("- " * 5000 + "1").value == 1.0
    assert ShuntingYardEngine().evaluate("(" * 3000 + "2" + ")" * 3000 + " * 3").value == 6.0


def test_result_rendering_uses_engine_epsilon():
    engine = ShuntingYardEngine(epsilon=0.01)

    result = engine.evaluate("x > 0 and not y", {"x": 1.0, "y": 0.005})

    assert result.epsilon == 0.01
    assert result.value == 1.0
    assert result.display_value == "true"

    tiny = engine.evaluate("x", {"x": 0.005})
    assert tiny.as_bool() is False
    assert ShuntingYardEngine().evaluate("x", {"x": 0.005}).as_bool() is True


def test_result_is_immutable():
    result = ShuntingYardEngine().evaluate("1 + 1")

    with pytest.raises(ValidationError):
        result.value = 3.0


def test_extract_variables_in_first_seen_order():
    engine = ShuntingYardEngine()

    assert engine.extract_variables("a + b * c") == ["a", "b", "c"]
    assert engine.extract_variables("b + a * b") == ["b", "a"]
    assert engine.extract_variables("1 + 2") == []


def test_extract_variables_still_validates():
    with pytest.raises(ExpressionSyntaxError):
        ShuntingYardEngine().extract_variables("a +")


def test_to_postfix_and_parse_need_no_bindings():
    engine = ShuntingYardEngine()

    assert " ".join(t.text for t in engine.to_postfix("x * (y + 1)")) == "x y 1 + *"
    assert engine.parse("x * 2").op == "*"


def test_engine_accepts_alternate_precedence_table():
    swapped = PrecedenceTable(
        replace(spec, precedence=6) if spec.symbol in ("+", "-")
        else replace(spec, precedence=5) if spec.symbol in ("*", "/")
        else spec
        for spec in default_precedence_table().values()
    )

    assert ShuntingYardEngine(table=swapped).evaluate("2 + 3 * 4").value == 20.0
    assert ShuntingYardEngine().evaluate("2 + 3 * 4").value == 14.0


def test_precedence_table_is_read_only_and_unique():
    assert DEFAULT_PRECEDENCE["^"].precedence == 7
    with pytest.raises(TypeError):
        DEFAULT_PRECEDENCE["^"] = DEFAULT_PRECEDENCE["*"]
    with pytest.raises(ValueError, match="Duplicate operator"):
        PrecedenceTable([DEFAULT_PRECEDENCE["+"], DEFAULT_PRECEDENCE["+"]])


def test_engine_rejects_non_positive_epsilon():
    with pytest.raises(ValueError):
        ShuntingYardEngine(epsilon=0.0)
