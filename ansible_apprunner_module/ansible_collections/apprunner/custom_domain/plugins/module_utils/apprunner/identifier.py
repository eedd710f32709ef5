from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.errors import (
    MalformedIdentifierError,
)

ID_SEPARATOR = ","


def encode(domain_name: str, service_arn: str) -> str:
    """
    Builds the composite identifier of an association.

    The separator is not escaped. A domain name never contains a comma, so
    decoding on the first separator always recovers both parts.
    """
    return ID_SEPARATOR.join([domain_name, service_arn])


def decode(resource_id: str) -> tuple[str, str]:
    """
    Splits a composite identifier into `(domain_name, service_arn)`.

    Raises:
        MalformedIdentifierError: if the separator is missing or either part is empty.
    """
    parts = (resource_id or "").split(ID_SEPARATOR, 1)

    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedIdentifierError(
            f"unexpected format of ID ({resource_id}), expected domain_name{ID_SEPARATOR}service_arn"
        )

    return parts[0], parts[1]
