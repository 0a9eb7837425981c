import pytest

from finantech.errors import ValidationError
from finantech.taxes import simulate_tax_regime


def test_simples():
    result = simulate_tax_regime(50000.0, "simples")

    assert result.total == pytest.approx(3000.0)
    assert [line.name for line in result.breakdown] == ["DAS (Simples Nacional)"]


def test_presumido():
    result = simulate_tax_regime(100000.0, "presumido")

    values = {line.name: line.value for line in result.breakdown}
    assert values["PIS"] == pytest.approx(650.0)
    assert values["COFINS"] == pytest.approx(3000.0)
    assert values["ISS"] == pytest.approx(5000.0)
    assert result.total == pytest.approx(8650.0)


def test_real():
    result = simulate_tax_regime(100000.0, "real")

    assert result.total == pytest.approx(1650.0 + 7600.0 + 5000.0)


def test_zero_revenue():
    assert simulate_tax_regime(0.0, "real").total == 0.0


def test_invalid_inputs():
    with pytest.raises(ValidationError):
        simulate_tax_regime(-1.0, "simples")
    with pytest.raises(ValidationError):
        simulate_tax_regime(1000.0, "mei")
