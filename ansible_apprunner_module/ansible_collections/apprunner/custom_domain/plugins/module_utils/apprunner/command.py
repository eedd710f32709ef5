from abc import ABC, abstractmethod
from typing import Any, Dict

from botocore.exceptions import BotoCoreError, ClientError

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.errors import (
    AppRunnerError,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.finder import (
    is_resource_not_found,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.identifier import (
    decode,
    encode,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.waiter import (
    wait_custom_domain_association_created,
    wait_custom_domain_association_deleted,
)


class BaseCommand(ABC):
    """
    Abstract base class for a command in the Command pattern.

    Each command encapsulates one write to the App Runner API together with
    the wait that makes it synchronous, and knows how to describe itself as a
    diff. Planning (deciding what to do) and execution (calling the API) are
    therefore kept apart, which is what makes check mode possible.
    """

    command_type = None

    def __init__(self, runner, description: str):
        """
        Initializes the command.

        Args:
            runner: The runner executing this command. It provides the API
                    client, the module parameters and error reporting.
            description (str): A human-readable summary of the command's purpose.
        """
        self.runner = runner
        self.description = description

    @property
    def resource_type(self) -> str:
        return self.runner.context["resource_type"]

    @abstractmethod
    def execute(self) -> Any:
        """
        Performs the write and, if requested, waits for it to settle.

        Returns:
            The resulting association, or None if there is none anymore.
        """
        pass

    @abstractmethod
    def to_diff(self) -> Dict[str, Any]:
        """Describes the change for Ansible's diff and check mode output."""
        pass

    def _wait_options(self) -> Dict[str, Any]:
        params = self.runner.module.params
        return {
            key: self.runner.context[key] if params.get(key) is None else params[key]
            for key in ("timeout", "interval")
        }


class AssociateCommand(BaseCommand):
    """Associates a custom domain with a service and waits for provisioning to start."""

    command_type = "create"

    def __init__(self, runner, domain_name: str, service_arn: str, enable_www_subdomain: bool):
        super().__init__(runner, f"Create {runner.context['resource_type']}")
        self.domain_name = domain_name
        self.service_arn = service_arn
        self.enable_www_subdomain = enable_www_subdomain
        self.resource_id = encode(domain_name, service_arn)

    def execute(self) -> Any:
        runner = self.runner

        try:
            output = runner.client.associate_custom_domain(
                DomainName=self.domain_name,
                EnableWWWSubdomain=self.enable_www_subdomain,
                ServiceArn=self.service_arn,
            )
        except (BotoCoreError, ClientError) as e:
            runner.module.fail_json(
                msg=f"creating {self.resource_type} ({self.resource_id}): {e}"
            )
            return None  # Unreachable

        runner.resource_id = self.resource_id
        dns_target = output.get("DNSTarget")

        if runner.module.params.get("wait", True):
            try:
                wait_custom_domain_association_created(
                    runner.client,
                    self.domain_name,
                    self.service_arn,
                    **self._wait_options(),
                )
            except (AppRunnerError, BotoCoreError, ClientError) as e:
                runner.module.fail_json(
                    msg=f"waiting for {self.resource_type} ({self.resource_id}) create: {e}",
                    id=self.resource_id,
                    dns_target=dns_target,
                )
                return None  # Unreachable

        association = runner.read(self.resource_id, is_new_resource=True)
        if association and not association.dns_target:
            association.dns_target = dns_target
        return association

    def to_diff(self) -> Dict[str, Any]:
        return {
            "state": "Resource will be created.",
            "new_attributes": {
                "id": self.resource_id,
                "domain_name": self.domain_name,
                "service_arn": self.service_arn,
                "enable_www_subdomain": self.enable_www_subdomain,
            },
        }


class DisassociateCommand(BaseCommand):
    """Removes a custom domain from a service and waits until it is gone."""

    command_type = "delete"

    def __init__(
        self,
        runner,
        resource_id: str,
        resource_to_delete: Dict[str, Any] | None = None,
        wait: bool | None = None,
    ):
        """
        Args:
            wait: Overrides the module's `wait` option. A replacement must
                  wait for the removal before associating the domain again.
        """
        super().__init__(runner, f"Delete {runner.context['resource_type']}")
        self.resource_id = resource_id
        self.resource_to_delete = resource_to_delete
        self.wait = wait

    def execute(self) -> Any:
        runner = self.runner

        try:
            domain_name, service_arn = decode(self.resource_id)
        except AppRunnerError as e:
            runner.module.fail_json(msg=f"deleting {self.resource_type}: {e}")
            return None  # Unreachable

        runner.module.log(f"[INFO] Deleting {self.resource_type}: {self.resource_id}")
        try:
            runner.client.disassociate_custom_domain(
                DomainName=domain_name,
                ServiceArn=service_arn,
            )
        except ClientError as e:
            if is_resource_not_found(e):
                return None
            runner.module.fail_json(
                msg=f"deleting {self.resource_type} ({self.resource_id}): {e}"
            )
            return None  # Unreachable
        except BotoCoreError as e:
            runner.module.fail_json(
                msg=f"deleting {self.resource_type} ({self.resource_id}): {e}"
            )
            return None  # Unreachable

        wait = runner.module.params.get("wait", True) if self.wait is None else self.wait
        if wait:
            try:
                wait_custom_domain_association_deleted(
                    runner.client,
                    domain_name,
                    service_arn,
                    **self._wait_options(),
                )
            except (AppRunnerError, BotoCoreError, ClientError) as e:
                runner.module.fail_json(
                    msg=f"waiting for {self.resource_type} ({self.resource_id}) delete: {e}"
                )

        return None

    def to_diff(self) -> Dict[str, Any]:
        return {
            "state": "Resource will be deleted.",
            "old_attributes": self.resource_to_delete,
        }
