from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = "modules.core"
    label = "core"

    def ready(self) -> None:
        from modules.core.container import init_container

        init_container()
