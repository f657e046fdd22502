# tests/core/test_status.py

import logging

import pytest

from uhf_llrp.core.exceptions import CommandError, MissingStatusError, TransportError, ReadError
from uhf_llrp.core.status import ConnectionStatus, ResultCode, check_llrp_status
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.parameters import LLRPStatus


def test_success_status_passes(caplog):
    check_llrp_status(LLRPStatus(), "addROSpec")
    assert caplog.records == []


def test_missing_status(caplog):
    with pytest.raises(MissingStatusError, match="addROSpec missing LLRP status"):
        check_llrp_status(None, "addROSpec")
    assert "addROSpec missing LLRP status" in caplog.text


def test_failure_with_description(caplog):
    status = LLRPStatus(status_code=llrp_const.StatusCode.M_FieldError, error_description="bad ROSpecID")
    with pytest.raises(CommandError) as exc_info:
        check_llrp_status(status, "enableROSpec")

    assert exc_info.value.status_code == llrp_const.StatusCode.M_FieldError
    assert exc_info.value.description == "bad ROSpecID"
    assert str(exc_info.value) == "Reader Error (M_FieldError): bad ROSpecID"
    assert caplog.records[-1].levelno == logging.ERROR
    assert caplog.records[-1].getMessage() == "enableROSpec failed, bad ROSpecID"


def test_failure_without_description(caplog):
    status = LLRPStatus(status_code=llrp_const.StatusCode.M_ParameterError)
    with pytest.raises(CommandError) as exc_info:
        check_llrp_status(status, "startROSpec")
    assert exc_info.value.description is None
    assert "startROSpec failed, no error description given" in caplog.text


def test_command_error_unknown_code():
    assert str(CommandError(status_code=4242)) == "Reader Error (Unknown status code 4242)"


def test_missing_status_is_a_command_error():
    assert issubclass(MissingStatusError, CommandError)


def test_enum_str():
    assert str(ConnectionStatus.CONNECTED) == "CONNECTED"
    assert str(ResultCode.RECV_TIMEOUT) == "RECV_TIMEOUT"


def test_transport_error_reason_and_str():
    error = ReadError("Read failed.", original_exception=OSError("reset"), result_code=ResultCode.RECV_IO_ERROR)
    assert isinstance(error, TransportError)
    assert error.reason == "Read failed."
    assert str(error) == "Read failed. Original exception: [OSError] reset"
    assert error.result_code == ResultCode.RECV_IO_ERROR
