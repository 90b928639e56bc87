from .step_20_update_packages import UpdatePackagesStep
from .step_30_setup_puppet import SetupPuppetStep
from .step_40_link_config import LinkConfigStep
from .step_50_install_prerequisites import InstallPrerequisitesStep

__all__ = [
    "UpdatePackagesStep",
    "SetupPuppetStep",
    "LinkConfigStep",
    "InstallPrerequisitesStep",
]
