from botocore.exceptions import BotoCoreError, ClientError

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.base_runner import (
    BaseRunner,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.command import (
    AssociateCommand,
    DisassociateCommand,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.errors import (
    AppRunnerError,
    NotFoundError,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.finder import (
    find_custom_domain,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.identifier import (
    decode,
    encode,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.models import (
    validate_arn,
    validate_domain_name,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.waiter import (
    DEFAULT_INTERVAL,
    DEFAULT_TIMEOUT,
)

DEFAULT_CONTEXT = {
    "resource_type": "App Runner Custom Domain Association",
    "timeout": DEFAULT_TIMEOUT,
    "interval": DEFAULT_INTERVAL,
}


class CustomDomainAssociationRunner(BaseRunner):
    """
    Runner for the `custom_domain_association` module.

    The association is addressed by its composite identifier, either passed
    directly as `id` (e.g. to adopt an association created elsewhere) or
    built from `domain_name` and `service_arn`. All of its attributes are
    immutable, so an update is a replacement.
    """

    def __init__(self, module, context=None, client=None):
        super().__init__(module, dict(DEFAULT_CONTEXT, **(context or {})), client=client)
        self.domain_name = None
        self.service_arn = None

    def resolve_identity(self):
        """Determines the id, domain name and service ARN from the module parameters."""
        params = self.module.params

        if params.get("id"):
            self.resource_id = params["id"]
            try:
                self.domain_name, self.service_arn = decode(self.resource_id)
            except AppRunnerError as e:
                self.module.fail_json(msg=f"reading {self.context['resource_type']}: {e}")
                return  # Unreachable
        else:
            self.domain_name = params.get("domain_name")
            self.service_arn = params.get("service_arn")
            if not self.domain_name or not self.service_arn:
                self.module.fail_json(
                    msg="Either 'id' or both 'domain_name' and 'service_arn' are required."
                )
                return  # Unreachable
            self.resource_id = encode(self.domain_name, self.service_arn)

        for error in (
            validate_domain_name(self.domain_name),
            validate_arn(self.service_arn),
        ):
            if error:
                self.module.fail_json(msg=error)

    def read(self, resource_id: str, is_new_resource: bool = False):
        """
        Fetches the authoritative state of an association.

        Returns:
            The `CustomDomainAssociation`, or None when it no longer exists.
            For a resource that was just created, not finding it is an error.
        """
        try:
            domain_name, service_arn = decode(resource_id)
        except AppRunnerError as e:
            self.module.fail_json(msg=f"reading {self.context['resource_type']}: {e}")
            return None  # Unreachable

        try:
            return find_custom_domain(self.client, domain_name, service_arn)
        except NotFoundError as e:
            if not is_new_resource:
                self.module.log(
                    f"[WARN] {self.context['resource_type']} ({resource_id}) not found, removing from state"
                )
                return None
            error = e
        except (AppRunnerError, BotoCoreError, ClientError) as e:
            error = e

        self.module.fail_json(
            msg=f"reading {self.context['resource_type']} ({resource_id}): {error}"
        )
        return None  # Unreachable

    def check_existence(self):
        self.resolve_identity()
        self.resource = self.read(self.resource_id)

    def _associate_command(self) -> AssociateCommand:
        enable_www_subdomain = self.module.params.get("enable_www_subdomain")
        return AssociateCommand(
            self,
            self.domain_name,
            self.service_arn,
            True if enable_www_subdomain is None else enable_www_subdomain,
        )

    def plan_creation(self) -> list:
        return [self._associate_command()]

    def plan_update(self) -> list:
        """
        Plans a replacement when the requested `enable_www_subdomain` differs
        from the existing association, since App Runner cannot change it in place.
        """
        requested = self.module.params.get("enable_www_subdomain")
        if requested is None or requested == self.resource.enable_www_subdomain:
            return []

        return [
            DisassociateCommand(
                self, self.resource_id, self.resource.to_state(), wait=True
            ),
            self._associate_command(),
        ]

    def plan_deletion(self) -> list:
        return [DisassociateCommand(self, self.resource_id, self.resource.to_state())]
