from dockerbuild.exceptions.base import DockerBuildException as _DockerBuildException


class DockerBuildUserException(_DockerBuildException):
    _ERROR_CODE = "USER:Unknown"


class DockerBuildAssertion(DockerBuildUserException, AssertionError):
    _ERROR_CODE = "USER:AssertionError"


class DockerBuildValidationException(DockerBuildAssertion):
    _ERROR_CODE = "USER:ValidationError"


class DockerBuildConfigException(DockerBuildUserException, ValueError):
    _ERROR_CODE = "USER:ConfigError"

    @classmethod
    def _create_verbose_message(cls, location, error_message):
        return "Invalid workspace config {}. {}".format(location, error_message)

    def __init__(self, location, error_message):
        super(DockerBuildConfigException, self).__init__(self._create_verbose_message(location, error_message))
        self.location = location
