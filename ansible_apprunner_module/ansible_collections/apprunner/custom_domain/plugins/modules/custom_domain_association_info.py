#!/usr/bin/python

DOCUMENTATION = r"""
---
module: custom_domain_association_info
short_description: List the custom domains associated with an AWS App Runner service
options:
  service_arn:
    description: The ARN of the App Runner service.
    type: str
    required: true
  domain_name:
    description: Only return the association of this domain.
    type: str
  region:
    description: The AWS region.
    type: str
  profile:
    description: The AWS profile to use.
    type: str
  aws_access_key:
    description: The AWS access key.
    type: str
  aws_secret_key:
    description: The AWS secret key.
    type: str
  session_token:
    description: The AWS session token.
    type: str
  endpoint_url:
    description: Overrides the App Runner endpoint.
    type: str
"""

EXAMPLES = r"""
- name: Get the validation records of example.com
  apprunner.custom_domain.custom_domain_association_info:
    service_arn: arn:aws:apprunner:us-east-1:123456789012:service/app/8fe1e10304f84fd2b0df550fe98a71fa
    domain_name: example.com
"""

RETURN = r"""
associations:
  description: The matching associations, shaped like the RV(resource) of M(apprunner.custom_domain.custom_domain_association).
  type: list
  elements: dict
  returned: always
"""

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.facts_runner import (
    FactsRunner,
)

ARGUMENT_SPEC = {
    "service_arn": {"type": "str", "required": True},
    "domain_name": {"type": "str"},
    "region": {"type": "str"},
    "profile": {"type": "str"},
    "aws_access_key": {"type": "str", "no_log": True},
    "aws_secret_key": {"type": "str", "no_log": True},
    "session_token": {"type": "str", "no_log": True},
    "endpoint_url": {"type": "str"},
}


def main():
    module = AnsibleModule(argument_spec=ARGUMENT_SPEC, supports_check_mode=True)
    runner = FactsRunner(module)
    runner.run()


if __name__ == "__main__":
    main()
