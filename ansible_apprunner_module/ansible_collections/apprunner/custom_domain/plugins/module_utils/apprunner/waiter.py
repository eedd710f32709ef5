import time
from typing import Any, Callable, Tuple

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.errors import (
    NotFoundError,
    UnexpectedStateError,
    WaitTimeoutError,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.finder import (
    find_custom_domain,
)

STATUS_ACTIVE = "active"
STATUS_BINDING_CERTIFICATE = "binding_certificate"
STATUS_CREATING = "creating"
STATUS_DELETING = "deleting"
STATUS_PENDING_CERTIFICATE_DNS_VALIDATION = "pending_certificate_dns_validation"

DEFAULT_TIMEOUT = 5 * 60
DEFAULT_INTERVAL = 10
DEFAULT_NOT_FOUND_CHECKS = 20

RefreshFunc = Callable[[], Tuple[Any, str]]


class StateWaiter:
    """
    Polls a refresh function until the object it reports reaches a target status.

    The refresh function returns `(obj, status)`. An `obj` of `None` means the
    object does not exist: with an empty `target` this is the goal of the wait
    (e.g. waiting for a deletion), otherwise it is tolerated for at most
    `not_found_checks` consecutive ticks.

    Any status that is neither pending nor a target stops the wait at once
    with an `UnexpectedStateError`. Exceptions raised by the refresh function
    propagate unchanged and abort the wait.
    """

    def __init__(
        self,
        pending: list,
        target: list,
        refresh: RefreshFunc,
        timeout: float = DEFAULT_TIMEOUT,
        interval: float = DEFAULT_INTERVAL,
        delay: float = 0,
        not_found_checks: int = DEFAULT_NOT_FOUND_CHECKS,
    ):
        self.pending = list(pending)
        self.target = list(target)
        self.refresh = refresh
        self.timeout = timeout
        self.interval = interval
        self.delay = delay
        self.not_found_checks = not_found_checks
        self.last_state = ""

    def wait(self) -> Any:
        """
        Blocks until a target status is reached.

        Returns:
            The last object reported by the refresh function, or `None` when
            the wait ended because the object disappeared.

        Raises:
            WaitTimeoutError: the deadline elapsed first.
            UnexpectedStateError: an unknown status was reported.
            NotFoundError: the object kept being absent while a status was expected.
        """
        start_time = time.time()
        not_found_ticks = 0

        if self.delay:
            time.sleep(self.delay)

        while time.time() - start_time < self.timeout:
            obj, state = self.refresh()
            self.last_state = state

            if obj is None:
                # Nothing to wait for anymore: the object is gone.
                if not self.target:
                    return None

                not_found_ticks += 1
                if not_found_ticks > self.not_found_checks:
                    raise NotFoundError(
                        f"couldn't find resource ({not_found_ticks} retries)"
                    )
            else:
                not_found_ticks = 0

                if state in self.target:
                    return obj
                if state not in self.pending:
                    raise UnexpectedStateError(state, self.target)

            time.sleep(self.interval)

        raise WaitTimeoutError(self.last_state, self.target, self.timeout)


def status_custom_domain(client, domain_name: str, service_arn: str) -> RefreshFunc:
    """
    Builds the refresh function for an association.

    A missing association is reported as `(None, "")`; any other lookup
    error is raised to the waiter.
    """

    def refresh():
        try:
            association = find_custom_domain(client, domain_name, service_arn)
        except NotFoundError:
            return None, ""

        return association, association.status

    return refresh


def wait_custom_domain_association_created(
    client,
    domain_name: str,
    service_arn: str,
    timeout: float = DEFAULT_TIMEOUT,
    interval: float = DEFAULT_INTERVAL,
):
    """
    Waits until the association has left `creating`.

    Certificate DNS validation is a manual step performed by the operator,
    so the wait ends as soon as App Runner asks for it (or is already
    binding the certificate), not when the association is `active`.
    """
    waiter = StateWaiter(
        pending=[STATUS_CREATING],
        target=[
            STATUS_PENDING_CERTIFICATE_DNS_VALIDATION,
            STATUS_BINDING_CERTIFICATE,
        ],
        refresh=status_custom_domain(client, domain_name, service_arn),
        timeout=timeout,
        interval=interval,
    )
    return waiter.wait()


def wait_custom_domain_association_deleted(
    client,
    domain_name: str,
    service_arn: str,
    timeout: float = DEFAULT_TIMEOUT,
    interval: float = DEFAULT_INTERVAL,
):
    """Waits until the association can no longer be found."""
    waiter = StateWaiter(
        pending=[STATUS_ACTIVE, STATUS_DELETING],
        target=[],
        refresh=status_custom_domain(client, domain_name, service_arn),
        timeout=timeout,
        interval=interval,
    )
    return waiter.wait()
