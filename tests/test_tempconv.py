import math

import pytest

from workbench.tempconv import c_to_f, f_to_c, format_celsius, main, parse_celsius


@pytest.mark.parametrize("value", [-40.0, 0.0, 37.5, 100.0, 1234.25])
def test_round_trip(value):
    assert math.isclose(f_to_c(c_to_f(value)), value, abs_tol=1e-9)
    assert math.isclose(c_to_f(f_to_c(value)), value, abs_tol=1e-9)


def test_fixed_point():
    assert f_to_c(-40.0) == -40.0
    assert c_to_f(-40.0) == -40.0


def test_format_default():
    assert format_celsius(20.0) == "20°C"


@pytest.mark.parametrize("text", ["100C", "100°C", "100 C"])
def test_parse_celsius_units(text):
    assert parse_celsius(text) == 100.0


@pytest.mark.parametrize("text", ["212F", "212°F", "-40F"])
def test_parse_fahrenheit_units(text):
    value = float(text.rstrip("F°"))
    assert parse_celsius(text) == f_to_c(value)


@pytest.mark.parametrize("text", ["100K", "100", "C", ""])
def test_parse_invalid(text):
    with pytest.raises(ValueError, match="invalid temperature"):
        parse_celsius(text)


def test_parse_invalid_message():
    with pytest.raises(ValueError) as info:
        parse_celsius("100K")
    assert str(info.value) == 'invalid temperature "100K"'


def test_main_default(capsys):
    main([])
    assert capsys.readouterr().out == "20°C\n"


def test_main_with_flag(capsys):
    main(["-temp=-18C"])
    assert capsys.readouterr().out == format_celsius(-18.0) + "\n"


def test_main_rejects_bad_value():
    with pytest.raises(SystemExit):
        main(["-temp", "hot"])