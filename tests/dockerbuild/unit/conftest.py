import os

import pytest
from hypothesis import settings

from dockerbuild.executors import BackendCapability, ExecutorContext, ProjectDescriptor

settings.register_profile("ci", max_examples=5, deadline=100_000)
settings.register_profile("dev", max_examples=10, deadline=10_000)

settings.load_profile(os.getenv("DOCKERBUILD_HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture()
def buildx_capability():
    return BackendCapability(engine_available=True, extended_backend_available=True)


@pytest.fixture()
def legacy_capability():
    return BackendCapability(engine_available=True, extended_backend_available=False)


@pytest.fixture()
def workspace(tmp_path):
    """A workspace root with one project that has a Dockerfile."""
    project_root = tmp_path / "apps" / "web"
    project_root.mkdir(parents=True)
    (project_root / "Dockerfile").write_text("FROM scratch\n")
    return tmp_path


@pytest.fixture()
def executor_context(workspace):
    return ExecutorContext(project=ProjectDescriptor(name="web", root="apps/web"), root=str(workspace))
