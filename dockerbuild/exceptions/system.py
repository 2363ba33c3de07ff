from dockerbuild.exceptions.base import DockerBuildException


class DockerBuildSystemException(DockerBuildException):
    _ERROR_CODE = "SYSTEM:Unknown"


class DockerBuildPreparationException(DockerBuildSystemException):
    _ERROR_CODE = "SYSTEM:PreparationError"

    def __init__(self, path: str):
        super(DockerBuildPreparationException, self).__init__(f"Failed to create metadata file directory {path}")
        self.path = path
