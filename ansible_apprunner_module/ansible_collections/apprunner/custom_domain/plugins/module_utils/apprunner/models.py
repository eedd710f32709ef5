from dataclasses import dataclass, field
import re
from typing import Any, Dict, List

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.identifier import (
    encode,
)

DOMAIN_NAME_MIN_LENGTH = 1
DOMAIN_NAME_MAX_LENGTH = 255

ARN_PATTERN = re.compile(
    r"^arn:[\w-]+:[a-zA-Z0-9-]+:([a-z]{2}(-gov)?-[a-z]+-\d)?:(\d{12})?:.+$"
)


def validate_domain_name(value: str) -> str | None:
    """Returns an error message if `value` is not an acceptable domain name."""
    if not DOMAIN_NAME_MIN_LENGTH <= len(value or "") <= DOMAIN_NAME_MAX_LENGTH:
        return (
            f"expected length of domain_name to be in the range "
            f"({DOMAIN_NAME_MIN_LENGTH} - {DOMAIN_NAME_MAX_LENGTH}), got {value}"
        )
    return None


def validate_arn(value: str) -> str | None:
    """Returns an error message if `value` is not a valid ARN."""
    if not value or not ARN_PATTERN.match(value):
        return f"service_arn ({value}) is an invalid ARN"
    return None


@dataclass
class CertificateValidationRecord:
    """A DNS record the operator must publish to validate the certificate."""

    name: str = ""
    status: str = ""
    type: str = ""
    value: str = ""

    @classmethod
    def from_api(cls, record: Dict[str, Any]) -> "CertificateValidationRecord":
        return cls(
            name=record.get("Name") or "",
            status=record.get("Status") or "",
            type=record.get("Type") or "",
            value=record.get("Value") or "",
        )

    def to_state(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "status": self.status,
            "type": self.type,
            "value": self.value,
        }


@dataclass
class CustomDomainAssociation:
    """
    The last observed state of a custom domain associated with an App Runner service.

    The service owns the lifecycle of this record; instances are only a cache
    of what `DescribeCustomDomains` returned.
    """

    domain_name: str
    service_arn: str
    enable_www_subdomain: bool = True
    dns_target: str | None = None
    status: str | None = None
    certificate_validation_records: List[CertificateValidationRecord] = field(
        default_factory=list
    )

    @property
    def id(self) -> str:
        return encode(self.domain_name, self.service_arn)

    @classmethod
    def from_api(
        cls,
        service_arn: str,
        custom_domain: Dict[str, Any],
        dns_target: str | None = None,
    ) -> "CustomDomainAssociation":
        """
        Maps a `CustomDomain` structure of the App Runner API to an association.

        Args:
            service_arn: The ARN of the owning service. It is not part of the
                         `CustomDomain` structure itself.
            custom_domain: One element of `DescribeCustomDomains.CustomDomains`.
            dns_target: The service-wide DNS target, when known.
        """
        return cls(
            domain_name=custom_domain.get("DomainName") or "",
            service_arn=service_arn,
            enable_www_subdomain=bool(custom_domain.get("EnableWWWSubdomain", True)),
            dns_target=dns_target,
            status=custom_domain.get("Status"),
            certificate_validation_records=[
                CertificateValidationRecord.from_api(record)
                for record in custom_domain.get("CertificateValidationRecords") or []
            ],
        )

    def to_state(self) -> Dict[str, Any]:
        """Flattens the association into the attributes returned by the modules."""
        return {
            "id": self.id,
            "domain_name": self.domain_name,
            "service_arn": self.service_arn,
            "enable_www_subdomain": self.enable_www_subdomain,
            "dns_target": self.dns_target,
            "status": self.status,
            "certificate_validation_records": [
                record.to_state() for record in self.certificate_validation_records
            ],
        }
