class _DockerBuildCodedExceptionMetaclass(type):
    @property
    def error_code(cls):
        return cls._ERROR_CODE


class DockerBuildException(Exception, metaclass=_DockerBuildCodedExceptionMetaclass):
    """
    Base of every dockerbuild error. ``str()`` gives ``<error code>: error=<message>``, followed by the cause when
    the error was raised from another one, which is what the CLI prints without ``-v``.
    """

    _ERROR_CODE = "UnknownDockerBuildException"

    def __str__(self):
        message = ",".join(str(a) for a in self.args) or "None"
        if self.__cause__ is None:
            return f"{self._ERROR_CODE}: error={message}"
        return f"{self._ERROR_CODE}: error={message}, cause={self.__cause__}"
