from decimal import Decimal

import pytest

from drivewise.infra.config import (
    BRACKET_OVERLAP_THRESHOLD_ENV,
    NET_INCOME_RATIO_ENV,
    bracket_overlap_threshold,
    net_income_ratio,
)


# ==============================================================================
# net_income_ratio()
# ==============================================================================


def test_net_income_ratio_defaults_to_one(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(NET_INCOME_RATIO_ENV, raising=False)

    assert net_income_ratio() == Decimal("1")


def test_blank_net_income_ratio_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(NET_INCOME_RATIO_ENV, "   ")

    assert net_income_ratio() == Decimal("1")


def test_net_income_ratio_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(NET_INCOME_RATIO_ENV, " 0.72 ")

    assert net_income_ratio() == Decimal("0.72")


@pytest.mark.parametrize("raw", ["0", "-0.5", "1.01"])
def test_net_income_ratio_out_of_range(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv(NET_INCOME_RATIO_ENV, raw)

    with pytest.raises(RuntimeError, match=NET_INCOME_RATIO_ENV):
        net_income_ratio()


@pytest.mark.parametrize("raw", ["seventy", "NaN", "Infinity"])
def test_net_income_ratio_not_a_number(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv(NET_INCOME_RATIO_ENV, raw)

    with pytest.raises(RuntimeError, match="decimal number"):
        net_income_ratio()


# ==============================================================================
# bracket_overlap_threshold()
# ==============================================================================


def test_overlap_threshold_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(BRACKET_OVERLAP_THRESHOLD_ENV, raising=False)

    assert bracket_overlap_threshold() == Decimal("0.30")


@pytest.mark.parametrize("raw", ["0", "0.5", "1"])
def test_overlap_threshold_from_env(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv(BRACKET_OVERLAP_THRESHOLD_ENV, raw)

    assert bracket_overlap_threshold() == Decimal(raw)


@pytest.mark.parametrize("raw", ["-0.1", "1.5"])
def test_overlap_threshold_out_of_range(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv(BRACKET_OVERLAP_THRESHOLD_ENV, raw)

    with pytest.raises(RuntimeError, match=BRACKET_OVERLAP_THRESHOLD_ENV):
        bracket_overlap_threshold()
