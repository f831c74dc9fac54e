import io

import pytest

from core.exceptions import (
    EXIT_MISSING_CONFIGURATION,
    abort_startup,
    business_code_to_http_status,
)
from domain.common.exceptions import MissingRequiredConfigurationError
from shared.codes import BusinessCode


@pytest.mark.parametrize("code, status", [
    (BusinessCode.CONFIG_MISSING, 500),
    (BusinessCode.CONFIG_KEY_INVALID, 500),
    (BusinessCode.SYSTEM_ERROR, 500),
    (BusinessCode.DATABASE_ERROR, 503),
    (BusinessCode.CACHE_ERROR, 503),
    (BusinessCode.CORE_HANDOFF_ERROR, 502),
    (BusinessCode.PARAM_ERROR, 400),
])
def test_business_code_maps_to_http_status(code, status):
    assert business_code_to_http_status(code) == status


def test_unknown_code_falls_back_to_400():
    assert business_code_to_http_status(99999) == 400


def test_only_success_and_param_error_fall_through_to_400():
    unmapped = [c for c in BusinessCode if business_code_to_http_status(c) == 400]
    assert unmapped == [BusinessCode.SUCCESS, BusinessCode.PARAM_ERROR]


def test_abort_startup_writes_diagnostic_and_exits_1():
    err = io.StringIO()
    with pytest.raises(SystemExit) as excinfo:
        abort_startup(MissingRequiredConfigurationError("DB_HOST"), err)
    assert excinfo.value.code == EXIT_MISSING_CONFIGURATION
    assert err.getvalue() == "Missing required environment variable: DB_HOST\n"
