from typing import Any

import pytest

from ansible_collections.apprunner.custom_domain.plugins.module_utils.apprunner.association_runner import (
    CustomDomainAssociationRunner,
)
from ansible_collections.apprunner.custom_domain.plugins.modules import (
    custom_domain_association,
    custom_domain_association_info,
)

from conftest import SERVICE_ARN, FakeModule


class RecordingRunner:
    instances: list["RecordingRunner"] = []

    def __init__(self, module: Any, *args: Any, **kwargs: Any):
        self.module = module
        self.ran = False
        RecordingRunner.instances.append(self)

    def run(self) -> None:
        self.ran = True


@pytest.fixture(autouse=True)
def reset_instances() -> None:
    RecordingRunner.instances = []


def test_association_module_wires_argument_spec(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def fake_ansible_module(**kwargs: Any) -> FakeModule:
        captured.update(kwargs)
        return FakeModule({"domain_name": "example.com", "service_arn": SERVICE_ARN})

    monkeypatch.setattr(custom_domain_association, "AnsibleModule", fake_ansible_module)
    monkeypatch.setattr(custom_domain_association, "CustomDomainAssociationRunner", RecordingRunner)

    custom_domain_association.main()

    spec = captured["argument_spec"]
    assert spec["enable_www_subdomain"] == {"type": "bool"}
    assert spec["timeout"]["default"] == 300
    assert spec["aws_secret_key"]["no_log"] is True
    assert ["id", "domain_name"] in captured["mutually_exclusive"]
    assert captured["supports_check_mode"] is True
    assert RecordingRunner.instances[0].ran is True


def test_info_module_requires_service_arn(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def fake_ansible_module(**kwargs: Any) -> FakeModule:
        captured.update(kwargs)
        return FakeModule({"service_arn": SERVICE_ARN})

    monkeypatch.setattr(custom_domain_association_info, "AnsibleModule", fake_ansible_module)
    monkeypatch.setattr(custom_domain_association_info, "FactsRunner", RecordingRunner)

    custom_domain_association_info.main()

    assert captured["argument_spec"]["service_arn"]["required"] is True
    assert RecordingRunner.instances[0].ran is True


def test_client_is_built_from_connection_parameters() -> None:
    module = FakeModule(
        {
            "domain_name": "example.com",
            "service_arn": SERVICE_ARN,
            "region": "eu-west-1",
            "aws_access_key": "AKIAEXAMPLE",
            "aws_secret_key": "secret",
            "endpoint_url": "http://localhost:4566",
        }
    )

    client = CustomDomainAssociationRunner(module).client

    assert client.meta.region_name == "eu-west-1"
    assert client.meta.endpoint_url == "http://localhost:4566"
    assert client.meta.service_model.service_name == "apprunner"
