class WidgetSettings:
    def __init__(
        self,
        name: str,
        cwd: str,
        bundle_id: str,
        deployment_target: str,
        current_project_version: int,
        **kwargs
    ):
        self.name = name
        # Directory of the widget sources, relative to the native project root
        self.cwd = cwd
        self.bundle_id = bundle_id
        self.deployment_target = deployment_target
        self.current_project_version = current_project_version
        self.__dict__.update(kwargs)

    @property
    def product_name(self) -> str:
        return self.name + "Extension"
