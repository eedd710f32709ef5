from typing import Any, Callable, Dict, Iterator, List

from botocore.exceptions import ClientError

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.errors import (
    MultipleResultsError,
    NotFoundError,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.models import (
    CustomDomainAssociation,
)

RESOURCE_NOT_FOUND = "ResourceNotFoundException"


def is_resource_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") == RESOURCE_NOT_FOUND


def iter_custom_domain_pages(
    client, service_arn: str, max_results: int | None = None
) -> Iterator[Dict[str, Any]]:
    """
    Yields the pages of `DescribeCustomDomains` for a service, following
    `NextToken` until the listing is exhausted.

    Each call starts a fresh listing, so the generator can be restarted by
    simply calling this function again.

    Raises:
        NotFoundError: if App Runner reports the service itself as missing.
    """
    request = {"ServiceArn": service_arn}
    if max_results:
        request["MaxResults"] = max_results

    while True:
        try:
            page = client.describe_custom_domains(**request)
        except ClientError as e:
            if is_resource_not_found(e):
                raise NotFoundError(
                    str(e), last_error=e, last_request=dict(request)
                ) from e
            raise

        yield page

        next_token = page.get("NextToken")
        if not next_token:
            return
        request["NextToken"] = next_token


def find_custom_domains(
    client,
    service_arn: str,
    predicate: Callable[[CustomDomainAssociation], bool] | None = None,
) -> List[CustomDomainAssociation]:
    """
    Collects every association of a service that satisfies `predicate`.

    The service-wide `DNSTarget` of each page is attached to the associations
    found on it.
    """
    results = []
    for page in iter_custom_domain_pages(client, service_arn):
        dns_target = page.get("DNSTarget")
        for custom_domain in page.get("CustomDomains") or []:
            association = CustomDomainAssociation.from_api(
                service_arn, custom_domain, dns_target=dns_target
            )
            if predicate is None or predicate(association):
                results.append(association)
    return results


def find_custom_domain(
    client, domain_name: str, service_arn: str
) -> CustomDomainAssociation:
    """
    Finds the single association of `domain_name` with the given service.

    Raises:
        NotFoundError: if the service is gone or has no such association.
        MultipleResultsError: if more than one association matches.
    """
    results = find_custom_domains(
        client,
        service_arn,
        lambda association: association.domain_name == domain_name,
    )

    if not results:
        raise NotFoundError(
            f"no custom domain '{domain_name}' associated with service {service_arn}"
        )
    if len(results) > 1:
        raise MultipleResultsError(len(results))

    return results[0]
