from raiden_kit.utils.configuration.base import ConfigMapping
from raiden_kit.utils.configuration.deploy import DeployConfig, load_deploy_config

__all__ = ["ConfigMapping", "DeployConfig", "load_deploy_config"]
