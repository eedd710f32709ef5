from abc import abstractmethod

import boto3
from ansible.module_utils.basic import AnsibleModule


class BaseRunner:
    """
    Abstract base class for all module runners.
    It handles common initialization, the App Runner client, and orchestrates
    a two-phase "plan and execute" workflow using the Command pattern.
    """

    def __init__(self, module: AnsibleModule, context: dict, client=None):
        """
        Initializes the runner.

        Args:
            module: The AnsibleModule instance.
            context: A dictionary containing configuration and data for the runner.
            client: An App Runner client. Built from the module's AWS
                    parameters on first use when not given.
        """
        self.module = module
        self.context = context
        self.has_changed = False
        self.resource = None
        self.resource_id = None
        self.plan = []
        self._client = client

    @property
    def client(self):
        """The boto3 App Runner client, created lazily from the connection parameters."""
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def _build_client(self):
        params = self.module.params
        session = boto3.session.Session(
            aws_access_key_id=params.get("aws_access_key"),
            aws_secret_access_key=params.get("aws_secret_key"),
            aws_session_token=params.get("session_token"),
            profile_name=params.get("profile"),
            region_name=params.get("region"),
        )
        return session.client("apprunner", endpoint_url=params.get("endpoint_url"))

    @abstractmethod
    def check_existence(self):
        """Populates `self.resource` with the current remote state, or None."""
        pass

    @abstractmethod
    def plan_creation(self) -> list:
        """Returns the commands creating a resource that does not exist yet."""
        pass

    @abstractmethod
    def plan_update(self) -> list:
        """Returns the commands converging an existing resource, possibly none."""
        pass

    @abstractmethod
    def plan_deletion(self) -> list:
        """Returns the commands removing an existing resource."""
        pass

    def run(self):
        """
        The universal `run` method for all runners.

        Determines the current state of the resource, delegates planning to
        `plan_creation`, `plan_update` or `plan_deletion`, and then either
        reports the plan (check mode) or executes it.
        """
        # Step 1: Determine the initial state of the resource.
        self.check_existence()

        # Step 2: Plan based on the desired state and the current existence.
        state = self.module.params["state"]
        if self.resource:
            if state == "present":
                self.plan = self.plan_update()
            elif state == "absent":
                self.plan = self.plan_deletion()
        elif state == "present":
            self.plan = self.plan_creation()

        # Step 3: Handle Check Mode.
        if self.module.check_mode:
            self.handle_check_mode(self.plan)
            return

        # Step 4: Execute the generated plan.
        self.execute_change_plan(self.plan)

        # Step 5: Exit with the final state.
        self.exit(plan=self.plan)

    def execute_change_plan(self, plan: list):
        """
        Executes a list of Command objects, making the actual API calls.
        This is the "execution" phase.
        """
        if not plan:
            return

        self.has_changed = True

        for command in plan:
            result = command.execute()

            if command.command_type == "create":
                self.resource = result
            elif command.command_type == "delete":
                self.resource = None

    def handle_check_mode(self, plan: list):
        """
        Generates a predictive diff from a change plan and exits.
        """
        if plan:
            self.has_changed = True
        self.exit(plan=plan)

    def exit(self, plan: list | None = None):
        """
        Formats the final response for Ansible and exits the module.
        The executed (or, in check mode, predicted) commands are reported as
        `commands`.
        """
        self.module.exit_json(
            changed=self.has_changed,
            id=self.resource_id,
            resource=self.resource.to_state() if self.resource else None,
            commands=[cmd.to_diff() for cmd in plan] if plan else [],
        )
