"""SandboxManifest: the orchestrator-neutral description of one sandbox."""

from pathlib import Path

from pydantic import BaseModel

from anode_eval.sandbox.domain.entrypoint import build_entrypoint_script
from anode_eval.sandbox.domain.job import JobSpec

SANDBOX_IMAGE = "anode-eval-agent:latest"
APP_LABEL = "anode-eval"
RUN_ID_LABEL = "run-id"
AGENT_LABEL = "agent"
PROMPT_ANNOTATION = "anode-eval/prompt"
EVAL_PATH_ANNOTATION = "anode-eval/eval-path"
WORKSPACE_DIR = "/workspace"
RESULTS_DIR = "/results"


class ResourceSpec(BaseModel, frozen=True):
    cpu: str
    memory: str


class SandboxManifest(BaseModel, frozen=True):
    """What to run, with which environment, limits and identity.

    ``eval_path`` is the fixture directory the workspace is seeded from.
    """

    name: str
    namespace: str
    labels: dict[str, str]
    annotations: dict[str, str]
    image: str = SANDBOX_IMAGE
    command: list[str]
    args: list[str]
    env: dict[str, str]
    limits: ResourceSpec = ResourceSpec(cpu="1", memory="1Gi")
    requests: ResourceSpec = ResourceSpec(cpu="500m", memory="512Mi")
    working_dir: str = WORKSPACE_DIR
    active_deadline_seconds: int
    restart_policy: str = "Never"
    run_as_user: int = 1000
    run_as_non_root: bool = True
    eval_path: Path


def build_manifest(job: JobSpec) -> SandboxManifest:
    # Credentials first so that run metadata can never be shadowed by a key name.
    env = {
        **job.api_keys,
        "RUN_ID": job.run_id,
        "AGENT_TOOL": job.agent.tool.value,
        "MODEL": job.agent.resolved_model,
        "ITERATIONS": str(job.iterations),
        "TIMEOUT_HOURS": f"{job.timeout_hours:g}",
        "WORKSPACE_DIR": WORKSPACE_DIR,
        "RESULTS_DIR": RESULTS_DIR,
    }
    return SandboxManifest(
        name=job.sandbox_name(),
        namespace=job.namespace,
        labels={
            "app": APP_LABEL,
            RUN_ID_LABEL: job.run_id,
            AGENT_LABEL: job.agent_label(),
        },
        annotations={
            PROMPT_ANNOTATION: job.prompt,
            EVAL_PATH_ANNOTATION: str(job.eval_path),
        },
        command=["/bin/bash", "-c"],
        args=[build_entrypoint_script(job)],
        env=env,
        active_deadline_seconds=int(job.timeout_hours * 3600),
        eval_path=job.eval_path,
    )
