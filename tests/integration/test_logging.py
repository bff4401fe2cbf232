import logging

from pngstrip.infrastructure.logging import configure_logging, get_correlation_id, set_correlation_id


def test_log_lines_carry_correlation_id(capsys):
    configure_logging(logging.INFO)
    set_correlation_id("abc-123")

    logging.getLogger("pngstrip.test").info("hello")

    out = capsys.readouterr().out
    assert "correlation_id=abc-123" in out
    assert "hello" in out


def test_verbose_enables_debug(capsys):
    configure_logging(logging.INFO, verbose=True)

    logging.getLogger("pngstrip.test").debug("details")

    assert "details" in capsys.readouterr().out


def test_correlation_id_generated_when_unset():
    set_correlation_id(None)  # type: ignore[arg-type]
    generated = get_correlation_id()

    assert generated
    assert get_correlation_id() == generated
