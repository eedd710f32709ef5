#!/usr/bin/python

DOCUMENTATION = r"""
---
module: custom_domain_association
short_description: Associate a custom domain with an AWS App Runner service
description:
  - Creates or removes the association between a custom domain and an App Runner service.
  - Creation waits until App Runner requests certificate DNS validation or starts binding
    the certificate. Publishing the validation records is left to the operator.
  - All attributes of an association are immutable. Changing O(enable_www_subdomain)
    replaces the association.
options:
  state:
    description: Whether the association should exist.
    type: str
    choices: [present, absent]
    default: present
  domain_name:
    description: The custom domain, 1 to 255 characters long.
    type: str
  service_arn:
    description: The ARN of the App Runner service.
    type: str
  id:
    description:
      - The composite identifier V(domain_name,service_arn), e.g. to adopt an existing association.
      - Mutually exclusive with O(domain_name) and O(service_arn).
    type: str
  enable_www_subdomain:
    description:
      - Whether the V(www.) subdomain is associated as well.
      - Defaults to V(true) on creation. When omitted, an existing association is kept as it is.
    type: bool
  wait:
    description: Wait for the association to settle after a create or delete.
    type: bool
    default: true
  timeout:
    description: Seconds to wait before giving up.
    type: int
    default: 300
  interval:
    description: Seconds between two status checks.
    type: int
    default: 10
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
- name: Associate example.com with a service
  apprunner.custom_domain.custom_domain_association:
    domain_name: example.com
    service_arn: arn:aws:apprunner:us-east-1:123456789012:service/app/8fe1e10304f84fd2b0df550fe98a71fa
    region: us-east-1
  register: association

- name: Remove an association by id
  apprunner.custom_domain.custom_domain_association:
    id: example.com,arn:aws:apprunner:us-east-1:123456789012:service/app/8fe1e10304f84fd2b0df550fe98a71fa
    state: absent
"""

RETURN = r"""
id:
  description: The composite identifier of the association.
  type: str
  returned: always
resource:
  description: The association, or null when it does not exist.
  type: dict
  returned: always
  contains:
    domain_name:
      type: str
    service_arn:
      type: str
    enable_www_subdomain:
      type: bool
    dns_target:
      description: The target to point the domain's CNAME at.
      type: str
    status:
      type: str
    certificate_validation_records:
      description: Records to publish to validate the certificate.
      type: list
      elements: dict
commands:
  description: The changes executed, or predicted in check mode.
  type: list
  returned: always
"""

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.association_runner import (
    CustomDomainAssociationRunner,
)
from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.waiter import (
    DEFAULT_INTERVAL,
    DEFAULT_TIMEOUT,
)

ARGUMENT_SPEC = {
    "state": {"type": "str", "choices": ["present", "absent"], "default": "present"},
    "domain_name": {"type": "str"},
    "service_arn": {"type": "str"},
    "id": {"type": "str"},
    "enable_www_subdomain": {"type": "bool"},
    "wait": {"type": "bool", "default": True},
    "timeout": {"type": "int", "default": DEFAULT_TIMEOUT},
    "interval": {"type": "int", "default": DEFAULT_INTERVAL},
    "region": {"type": "str"},
    "profile": {"type": "str"},
    "aws_access_key": {"type": "str", "no_log": True},
    "aws_secret_key": {"type": "str", "no_log": True},
    "session_token": {"type": "str", "no_log": True},
    "endpoint_url": {"type": "str"},
}


def main():
    module = AnsibleModule(
        argument_spec=ARGUMENT_SPEC,
        mutually_exclusive=[["id", "domain_name"], ["id", "service_arn"]],
        required_one_of=[["id", "domain_name"]],
        required_together=[["domain_name", "service_arn"]],
        supports_check_mode=True,
    )
    runner = CustomDomainAssociationRunner(module)
    runner.run()


if __name__ == "__main__":
    main()
