# apps/account_svc/account_svc_main.py
from libs.app.bootstrap import create_service_app
from libs.containers.account_container import AccountContainer
from apps.account_svc.config.settings_account import AccountServiceSettings

app = create_service_app(
    service_name="account-svc",
    settings_class=AccountServiceSettings,
    container_factory=AccountContainer.create,
)
