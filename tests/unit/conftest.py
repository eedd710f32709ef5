from __future__ import annotations

from typing import Any

import pytest
from botocore.exceptions import ClientError

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner import (
    waiter,
)

SERVICE_ARN = "arn:aws:apprunner:us-east-1:123456789012:service/app/8fe1e10304f84fd2b0df550fe98a71fa"
DNS_TARGET = "xyzxyz.us-east-1.awsapprunner.com"

# A status of None in a scripted sequence means the association is gone.
GONE = None


class AnsibleExitJson(Exception):
    def __init__(self, kwargs: dict[str, Any]):
        super().__init__(kwargs)
        self.result = kwargs


class AnsibleFailJson(Exception):
    def __init__(self, kwargs: dict[str, Any]):
        super().__init__(kwargs.get("msg"))
        self.result = kwargs


class FakeModule:
    """Stands in for AnsibleModule: records logs and turns exits into exceptions."""

    def __init__(self, params: dict[str, Any], check_mode: bool = False):
        defaults = {
            "state": "present",
            "domain_name": None,
            "service_arn": None,
            "id": None,
            "enable_www_subdomain": None,
            "wait": True,
            "timeout": 300,
            "interval": 10,
        }
        self.params = {**defaults, **params}
        self.check_mode = check_mode
        self.logs: list[str] = []
        self.warnings: list[str] = []

    def exit_json(self, **kwargs: Any) -> None:
        raise AnsibleExitJson(kwargs)

    def fail_json(self, **kwargs: Any) -> None:
        raise AnsibleFailJson(kwargs)

    def log(self, msg: str) -> None:
        self.logs.append(msg)

    def warn(self, msg: str) -> None:
        self.warnings.append(msg)


def client_error(code: str, operation: str, message: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeAppRunnerClient:
    """
    An in-memory App Runner client covering the custom domain operations.

    Statuses of an association can be scripted: each listing (a describe
    call without NextToken) moves to the next scripted status, and the last
    one sticks.
    """

    def __init__(self, page_size: int = 2):
        self.page_size = page_size
        self.services: dict[str, dict[str, dict[str, Any]]] = {}
        self.scripts: dict[tuple[str, str], list] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.describe_error: ClientError | None = None

    def add_service(self, service_arn: str = SERVICE_ARN) -> None:
        self.services.setdefault(service_arn, {})

    def add_custom_domain(
        self,
        domain_name: str,
        service_arn: str = SERVICE_ARN,
        status: str = "active",
        enable_www_subdomain: bool = True,
        records: list[dict[str, str]] | None = None,
    ) -> None:
        self.add_service(service_arn)
        self.services[service_arn][domain_name] = {
            "DomainName": domain_name,
            "EnableWWWSubdomain": enable_www_subdomain,
            "Status": status,
            "CertificateValidationRecords": records
            if records is not None
            else [
                {
                    "Name": f"_abc.{domain_name}.",
                    "Type": "CNAME",
                    "Value": "_def.acm-validations.aws.",
                    "Status": "PENDING_VALIDATION",
                }
            ],
        }

    def script_statuses(self, domain_name: str, statuses: list, service_arn: str = SERVICE_ARN) -> None:
        self.scripts[(service_arn, domain_name)] = list(statuses)

    def _advance_scripts(self, service_arn: str) -> None:
        for (arn, domain_name), statuses in self.scripts.items():
            domains = self.services.get(arn, {})
            if arn != service_arn or not statuses or domain_name not in domains:
                continue
            status = statuses.pop(0) if len(statuses) > 1 else statuses[0]
            if status is GONE:
                domains.pop(domain_name, None)
                statuses.clear()
            elif domain_name in domains:
                domains[domain_name]["Status"] = status

    def associate_custom_domain(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("associate_custom_domain", kwargs))
        service_arn = kwargs["ServiceArn"]
        if service_arn not in self.services:
            raise client_error("ResourceNotFoundException", "AssociateCustomDomain")
        self.add_custom_domain(
            kwargs["DomainName"],
            service_arn,
            status="creating",
            enable_www_subdomain=kwargs["EnableWWWSubdomain"],
        )
        return {
            "DNSTarget": DNS_TARGET,
            "ServiceArn": service_arn,
            "CustomDomain": self.services[service_arn][kwargs["DomainName"]],
        }

    def disassociate_custom_domain(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("disassociate_custom_domain", kwargs))
        domains = self.services.get(kwargs["ServiceArn"])
        if domains is None or kwargs["DomainName"] not in domains:
            raise client_error("ResourceNotFoundException", "DisassociateCustomDomain")
        domains[kwargs["DomainName"]]["Status"] = "deleting"
        return {"DNSTarget": DNS_TARGET, "ServiceArn": kwargs["ServiceArn"]}

    def describe_custom_domains(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("describe_custom_domains", kwargs))
        if self.describe_error is not None:
            raise self.describe_error

        service_arn = kwargs["ServiceArn"]
        if service_arn not in self.services:
            raise client_error("ResourceNotFoundException", "DescribeCustomDomains")
        if "NextToken" not in kwargs:
            self._advance_scripts(service_arn)

        domains = list(self.services[service_arn].values())
        start = int(kwargs.get("NextToken", 0))
        end = start + self.page_size
        page = {
            "DNSTarget": DNS_TARGET,
            "ServiceArn": service_arn,
            "CustomDomains": [dict(d) for d in domains[start:end]],
        }
        if end < len(domains):
            page["NextToken"] = str(end)
        return page

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


class FakeClock:
    def __init__(self) -> None:
        self.now = 1_000_000.0
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(waiter.time, "time", fake.time)
    monkeypatch.setattr(waiter.time, "sleep", fake.sleep)
    return fake


@pytest.fixture
def client() -> FakeAppRunnerClient:
    fake = FakeAppRunnerClient()
    fake.add_service()
    return fake
