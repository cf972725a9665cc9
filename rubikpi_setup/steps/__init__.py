from .step_10_set_hostname import SetHostnameStep
from .step_20_add_repository import AddRepositoryStep
from .step_30_install_camera import InstallCameraStep
from .step_40_install_software import InstallSoftwareStep
from .step_50_upgrade_system import UpgradeSystemStep
from .step_90_reboot import RebootStep

__all__ = [
    "SetHostnameStep",
    "AddRepositoryStep",
    "InstallCameraStep",
    "InstallSoftwareStep",
    "UpgradeSystemStep",
    "RebootStep",
]
