import logging
import random
import re
import sys
import time
from collections.abc import Mapping
from typing import Any, TextIO

from botocore.client import BaseClient
from botocore.exceptions import ClientError

from apigw_domains.exceptions import AmbiguousBooleanError
from apigw_domains.globals import (
    RETRYABLE_ERROR_CODES,
    THROTTLE_MAX_TIME,
    THROTTLE_MAX_WAIT,
    THROTTLE_MIN_WAIT,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1")
_FALSE_VALUES = ("false", "0")


def sleep(seconds: float) -> None:
    """Block the current thread for the given number of seconds."""
    time.sleep(seconds)


def evaluate_boolean(value: Any, default: bool) -> bool:
    """Determine whether a boolean config value is configured to true or false.

    If the value is None, ``default`` is returned. Otherwise the value must be a boolean or a
    string (or number) parseable as one: "true"/"1" or "false"/"0", case-insensitive and
    ignoring surrounding whitespace.

    Raises:
        AmbiguousBooleanError: If the value can't be interpreted as a boolean.
    """
    if value is None:
        return default

    s = str(value).lower().strip()
    if s in _TRUE_VALUES:
        return True
    if s in _FALSE_VALUES:
        return False
    raise AmbiguousBooleanError(value)


def prompt_for_mfa_token(
    mfa_serial: str, stderr: TextIO = sys.stderr, stdin: TextIO = sys.stdin
) -> str:
    """Prompt the user for an MFA token and return what they typed."""
    stderr.write(f"Enter MFA token for {mfa_serial}: ")
    stderr.flush()
    answer = stdin.readline().rstrip("\r\n")
    return re.sub(r"[^0-9]", "", answer, count=1)


def _error_code(err: ClientError) -> str:
    return err.response.get("Error", {}).get("Code", "")


def throttled_call(client: BaseClient, method: str, params: Mapping[str, Any]) -> dict:
    """Call a boto3 client method, retrying while AWS reports throttling.

    Waits between attempts use decorrelated jitter bounded by THROTTLE_MIN_WAIT and
    THROTTLE_MAX_WAIT. Once THROTTLE_MAX_TIME seconds have been spent waiting, the last
    throttling error is re-raised.
    """
    time_passed = 0
    previous_interval = 0
    while True:
        try:
            return getattr(client, method)(**params)
        except ClientError as e:
            if _error_code(e) not in RETRYABLE_ERROR_CODES or time_passed >= THROTTLE_MAX_TIME:
                raise
            upper = max(THROTTLE_MIN_WAIT, previous_interval * 3)
            jittered = random.randint(THROTTLE_MIN_WAIT, upper)  # noqa: S311
            previous_interval = max(THROTTLE_MIN_WAIT, min(THROTTLE_MAX_WAIT, jittered))
            logger.debug(
                "Throttled on %s (%s), retrying in %ss", method, _error_code(e), previous_interval
            )
            sleep(previous_interval)
            time_passed += previous_interval


def get_aws_paged_results(
    client: BaseClient,
    method: str,
    results_key: str,
    next_token_key: str,
    next_request_token_key: str,
    params: Mapping[str, Any],
) -> list:
    """Collect every page of a list call.

    ``next_request_token_key`` names the response field holding the continuation token, and
    ``next_token_key`` the request parameter it is passed back as.
    """
    request = dict(params)
    response = throttled_call(client, method, request)
    results = list(response.get(results_key, []))
    while response.get(next_request_token_key):
        request[next_token_key] = response[next_request_token_key]
        response = throttled_call(client, method, request)
        results.extend(response.get(results_key, []))
    return results
