import pytest
from linmath.core.errors import LinmathError, PreconditionViolation
from linmath.core.options import MathOptions, configure, format_number, get_options, require, reset_options


@pytest.fixture(autouse=True)
def clean_options(monkeypatch):
    # Never let the developer's environment leak into these tests
    for name in ("LINMATH_DEBUG", "LINMATH_NUMBER_FORMAT", "LINMATH_DECIMALS", "LINMATH_SIN_LOOKUP_BITS"):
        monkeypatch.delenv(name, raising=False)
    reset_options()
    yield
    reset_options()


def test_defaults():
    opts = MathOptions.from_env({})
    assert opts.debug == False
    assert opts.use_number_format == True
    assert opts.number_format_decimals == 3
    assert opts.sin_lookup_bits == 14

def test_from_env_mapping():
    opts = MathOptions.from_env({
        "LINMATH_DEBUG": "yes",
        "LINMATH_NUMBER_FORMAT": "off",
        "LINMATH_DECIMALS": "5",
        "LINMATH_SIN_LOOKUP_BITS": "10",
    })
    assert opts.debug == True
    assert opts.use_number_format == False
    assert opts.number_format_decimals == 5
    assert opts.sin_lookup_bits == 10

def test_from_env_rejects_bad_values():
    with pytest.raises(ValueError):
        MathOptions.from_env({"LINMATH_DEBUG": "maybe"})
    with pytest.raises(ValueError):
        MathOptions.from_env({"LINMATH_SIN_LOOKUP_BITS": "30"})
    with pytest.raises(ValueError):
        MathOptions(number_format_decimals=-1)

def test_get_options_reads_process_environment(monkeypatch):
    monkeypatch.setenv("LINMATH_DEBUG", "1")
    reset_options()
    assert get_options().debug == True

def test_configure_and_reset():
    assert get_options().debug == False
    configure(debug=True)
    assert get_options().debug == True
    reset_options()
    assert get_options().debug == False

def test_require_only_raises_in_debug():
    # Off by default: failing conditions are ignored
    require(False, "ignored")
    configure(debug=True)
    require(True, "fine")
    with pytest.raises(PreconditionViolation):
        require(False, "must hold")

def test_precondition_violation_hierarchy():
    assert issubclass(PreconditionViolation, LinmathError)
    assert issubclass(PreconditionViolation, ValueError)

def test_format_number():
    assert format_number(1.0) == " 1.000E+00"
    assert format_number(-1234.0) == "-1.234E+03"
    configure(number_format_decimals=1)
    assert format_number(0.25) == " 2.5E-01"
    configure(use_number_format=False)
    assert format_number(0.25) == "0.25"
