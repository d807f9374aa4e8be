"""Unit tests for return-type-must-be-single-shape."""

import pytest

from object_design_linter.domain.rules.return_shape import mixed_return_type
from tests.conftest import method, rule_context


@pytest.mark.parametrize(
    "return_type",
    [None, "void", "string", "?User", "User|null", "Optional[User]", "list[int | str]", "static"],
)
def test_single_shape_returns_pass(return_type: str) -> None:
    decl = method("find", return_type=return_type)
    assert mixed_return_type(decl, rule_context()) is None


@pytest.mark.parametrize("return_type", ["int|string", "Union[int, str]", "mixed", "Any", "int | str | None"])
def test_mixed_returns_fail(return_type: str) -> None:
    decl = method("find", return_type=return_type)
    message = mixed_return_type(decl, rule_context())
    assert message is not None
    assert "Mailer::find" in message


def test_sanctioned_union_passes_in_any_spelling() -> None:
    context = rule_context(sanctioned_return_unions=["string|int"])
    assert mixed_return_type(method("find", return_type="int | string"), context) is None
    assert mixed_return_type(method("find", return_type="Union[str, int]"), context) is not None


def test_ad_hoc_return_is_never_sanctioned() -> None:
    context = rule_context(sanctioned_return_unions=["mixed"])
    assert mixed_return_type(method("find", return_type="mixed"), context) is not None
