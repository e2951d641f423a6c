import logging

from product_api.errors import NotFoundError, OperationalError, ValidationError, translate_error


def test_operational_error_status_tag():
    assert OperationalError("bad", 400).status == "fail"
    assert OperationalError("down", 503).status == "error"
    assert OperationalError("bad", 400).is_operational is True


def test_specialisations_have_defaults():
    assert NotFoundError().message == "Resource not found"
    assert NotFoundError().status_code == 404
    assert ValidationError().message == "Invalid Input"
    assert ValidationError().status_code == 400


def test_translate_operational_error():
    status_code, body = translate_error(NotFoundError("No such product"))
    assert status_code == 404
    assert body == {"status": "fail", "message": "No such product"}


def test_translate_unexpected_error_hides_detail(caplog):
    with caplog.at_level(logging.ERROR, logger="product_api.errors"):
        status_code, body = translate_error(KeyError("secret internals"))
    assert status_code == 500
    assert body == {"message": "Error"}
    assert "secret internals" not in str(body)
    assert any(r.exc_info for r in caplog.records)
