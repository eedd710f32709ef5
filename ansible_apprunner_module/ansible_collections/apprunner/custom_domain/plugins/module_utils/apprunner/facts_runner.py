from botocore.exceptions import BotoCoreError, ClientError

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.base_runner import (
    BaseRunner,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.errors import (
    NotFoundError,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.finder import (
    find_custom_domains,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.models import (
    validate_arn,
)


class FactsRunner(BaseRunner):
    """
    A runner for the info module, which only retrieves associations ('facts').
    """

    def __init__(self, module, context=None, client=None):
        super().__init__(module, context or {}, client=client)
        self.associations = []

    def run(self):
        """
        The main execution path of the runner.
        """
        self._find_associations()
        self.module.exit_json(
            changed=False,
            associations=[association.to_state() for association in self.associations],
        )

    def _find_associations(self):
        """
        Lists the associations of a service, optionally narrowed to one domain.
        A service that does not exist simply has no associations.
        """
        service_arn = self.module.params["service_arn"]
        domain_name = self.module.params.get("domain_name")

        error = validate_arn(service_arn)
        if error:
            self.module.fail_json(msg=error)
            return

        def predicate(association):
            return not domain_name or association.domain_name == domain_name

        try:
            self.associations = find_custom_domains(self.client, service_arn, predicate)
        except NotFoundError:
            self.module.warn(f"App Runner service {service_arn} not found.")
            self.associations = []
        except (BotoCoreError, ClientError) as e:
            self.module.fail_json(
                msg=f"listing App Runner Custom Domain Associations ({service_arn}): {e}"
            )
