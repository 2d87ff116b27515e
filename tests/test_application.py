from PySide6.QtCore import QCoreApplication

from drillblock import application
from drillblock.view import main_window


def test_window_title_uses_application_name():
    assert main_window.VISIBLE_APP_NAME is application.VISIBLE_APP_NAME


def test_create_app_reuses_running_instance(qapp):
    app = application.create_app()
    assert app is qapp
    assert QCoreApplication.organizationName() == application.ORG_ID
    assert QCoreApplication.applicationName() == application.APP_ID
    assert app.applicationDisplayName() == application.VISIBLE_APP_NAME
