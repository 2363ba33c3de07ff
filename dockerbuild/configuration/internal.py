from dockerbuild.configuration.file import ConfigEntry


class Build(object):
    SECTION = "build"
    CI = ConfigEntry(SECTION, "ci", bool, default_val=False)
    """
    Run builds in CI mode unless the command line says otherwise. CI providers usually export ``CI=true``, this
    entry is read from ``DOCKERBUILD_BUILD_CI`` so that local shells are not affected.
    """


class Logging(object):
    SECTION = "logging"
    LEVEL = ConfigEntry(SECTION, "level", int)
