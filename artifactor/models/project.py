"""Project information models"""

from dataclasses import dataclass

from .options import PublishOptions


@dataclass(frozen=True)
class Project:
    """Publish target of one project

    Both prefixes already contain the project name and end with ``/``.
    """
    name: str
    storage_prefix: str
    url_prefix: str

    @classmethod
    def from_options(cls, options: PublishOptions) -> 'Project':
        """Create the project from (normalized) publish options"""
        return cls(
            name=options.project_name,
            storage_prefix=options.storage_prefix + options.project_name + "/",
            url_prefix=options.url_prefix + options.project_name + "/",
        )

    def version_storage_prefix(self, version: str) -> str:
        return f"{self.storage_prefix}{version}/"

    def version_url_prefix(self, version: str) -> str:
        return f"{self.url_prefix}{version}/"

    def alias_storage_prefix(self, alias: str) -> str:
        return f"{self.storage_prefix}{alias}/"
