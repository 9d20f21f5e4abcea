import pytest

from chartplay.expect import ExpectationError, expect


class Node:
    def __init__(self, connected: bool) -> None:
        self.is_connected = connected


def test_matchers_pass() -> None:
    expect("2019, 10. Point 1").to_contain("2019, 10")
    expect(1).to_be_truthy()
    expect(0).to_be_defined()
    expect("a").to_be("a")
    expect("a").not_.to_be("b")
    expect(Node(True)).to_be_in_the_document()
    expect(object()).to_be_in_the_document()


def test_matchers_fail_with_assertion_errors() -> None:
    with pytest.raises(ExpectationError, match="to contain"):
        expect("loading...").to_contain("Revenue")
    with pytest.raises(AssertionError):
        expect("").to_be_truthy()
    with pytest.raises(ExpectationError):
        expect(None).to_be_defined()
    with pytest.raises(ExpectationError, match="expected not"):
        expect("same").not_.to_be("same")
    with pytest.raises(ExpectationError, match="in the document"):
        expect(Node(False)).to_be_in_the_document()
    with pytest.raises(ExpectationError):
        expect(None).to_be_in_the_document()


def test_contain_on_missing_text_fails_instead_of_type_error() -> None:
    with pytest.raises(ExpectationError):
        expect(None).to_contain("2019")


def test_double_negation_restores_matcher() -> None:
    expect("x").not_.not_.to_be("x")
