# installer/steps.py
# -*- coding: utf-8 -*-
"""
Declarative installation steps for the supported DevOps tools.

Each tool is described as data: an ordered list of actions and the checks
that prove the install worked. Versions and download locations come from
AppSettings so a YAML file or DEVOPS_* environment variables can move them
without touching code.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from common.command_utils import get_symbols
from installer.config import PREREQ_PACKAGES
from installer.config_models import AppSettings
from installer.models import Action, Step, Verification
from installer.registry import StepRegistry

YUM_REPOS_DIR = "/etc/yum.repos.d"
SYSTEMD_UNIT_DIR = "/etc/systemd/system"
LOCAL_BIN_DIR = "/usr/local/bin"

KUBERNETES_REPO_TEMPLATE = """\
[kubernetes]
name=Kubernetes
baseurl=https://pkgs.k8s.io/core:/stable:/{version}/rpm/
enabled=1
gpgcheck=1
gpgkey=https://pkgs.k8s.io/core:/stable:/{version}/rpm/repodata/repomd.xml.key
"""

PROMETHEUS_UNIT = """\
[Unit]
Description=Prometheus
Wants=network-online.target
After=network-online.target

[Service]
User=prometheus
Group=prometheus
Type=simple
ExecStart=/usr/local/bin/prometheus \\
    --config.file /etc/prometheus/prometheus.yml \\
    --storage.tsdb.path /var/lib/prometheus/

[Install]
WantedBy=multi-user.target
"""


def _package_install(
    app_settings: AppSettings,
    *packages: str,
    failure_message: Optional[str] = None,
    status_lines: Tuple[str, ...] = (),
) -> Action:
    return Action(
        argv=(app_settings.package_manager, "install", "-y", *packages),
        elevated=True,
        failure_message=failure_message,
        status_lines=status_lines,
    )


def _daemon_reload() -> Action:
    return Action(
        argv=("systemctl", "daemon-reload"), elevated=True, check=False
    )


def _enable_now(service_name: str, failure_message: Optional[str] = None) -> Action:
    return Action(
        argv=("systemctl", "enable", "--now", service_name),
        elevated=True,
        failure_message=failure_message,
    )


def build_prerequisites_step(app_settings: AppSettings) -> Step:
    """System update plus the download tools every other step relies on."""
    refresh = get_symbols(app_settings).get("refresh", "🔄")
    return Step(
        identifier="prerequisites",
        label="system prerequisites",
        actions=(
            Action(
                argv=(app_settings.package_manager, "update", "-y"),
                elevated=True,
                failure_message="System update failed!",
                status_lines=(f"{refresh} Running system update...",),
            ),
            _package_install(
                app_settings,
                *PREREQ_PACKAGES,
                failure_message=f"Failed to install {' or '.join(PREREQ_PACKAGES)}!",
                status_lines=(
                    f"{refresh} Installing prerequisites ({', '.join(PREREQ_PACKAGES)})...",
                ),
            ),
        ),
        success_message="System prerequisites installed.",
    )


def git_step(app_settings: AppSettings) -> Step:
    return Step(
        identifier="git",
        label="Git",
        actions=(_package_install(app_settings, "git"),),
        verification=Verification(commands=("git",)),
    )


def maven_step(app_settings: AppSettings) -> Step:
    return Step(
        identifier="maven",
        label="Maven",
        actions=(_package_install(app_settings, "maven"),),
        verification=Verification(commands=("mvn",)),
    )


def ansible_step(app_settings: AppSettings) -> Step:
    # The EPEL install exits non-zero when the release package is already
    # present; the repolist check below is what decides.
    return Step(
        identifier="ansible",
        label="Ansible",
        actions=(
            Action(
                argv=("dnf", "install", "-y", str(app_settings.epel_release_url)),
                elevated=True,
                check=False,
            ),
            Action(
                argv=("dnf", "repolist"),
                elevated=True,
                expect_output="epel",
                failure_message="epel-release installation failed!",
            ),
            Action(argv=("dnf", "install", "-y", "ansible"), elevated=True),
        ),
        verification=Verification(commands=("ansible",)),
    )


def jenkins_step(app_settings: AppSettings) -> Step:
    return Step(
        identifier="jenkins",
        label="Jenkins",
        actions=(
            Action(
                argv=(
                    "wget",
                    "-O",
                    f"{YUM_REPOS_DIR}/jenkins.repo",
                    str(app_settings.jenkins_repo_url),
                ),
                elevated=True,
            ),
            Action(
                argv=("rpm", "--import", str(app_settings.jenkins_key_url)),
                elevated=True,
            ),
            _package_install(
                app_settings, "fontconfig", "java-17-openjdk", "jenkins"
            ),
            _daemon_reload(),
            _enable_now("jenkins", "Jenkins failed to start!"),
        ),
        verification=Verification(services=("jenkins",)),
        success_message="Jenkins installed and running!",
    )


def sonarqube_step(app_settings: AppSettings) -> Step:
    work_dir = Path(app_settings.work_dir)
    release = f"sonarqube-{app_settings.sonarqube_version}"
    archive = f"{release}.zip"
    return Step(
        identifier="sonarqube",
        label="SonarQube",
        actions=(
            Action(
                argv=(
                    "wget",
                    f"https://binaries.sonarsource.com/Distribution/sonarqube/{archive}",
                ),
                cwd=str(work_dir),
            ),
            Action(argv=("unzip", "-o", archive), cwd=str(work_dir)),
            Action(
                argv=(
                    str(work_dir / release / "bin" / "linux-x86-64" / "sonar.sh"),
                    "start",
                ),
                failure_message="SonarQube failed to start!",
            ),
        ),
        success_message="SonarQube installed and running!",
    )


def nexus_step(app_settings: AppSettings) -> Step:
    work_dir = Path(app_settings.work_dir)
    release = f"nexus-{app_settings.nexus_version}"
    archive = f"nexus-unix-x86-64-{app_settings.nexus_version}.tar.gz"
    return Step(
        identifier="nexus",
        label="Nexus",
        actions=(
            Action(
                argv=(
                    "wget",
                    f"https://download.sonatype.com/nexus/3/{archive}",
                ),
                cwd=str(work_dir),
            ),
            Action(argv=("tar", "-xzf", archive), cwd=str(work_dir)),
            Action(
                argv=(str(work_dir / release / "bin" / "nexus"), "start"),
                cwd=str(work_dir / release / "bin"),
                failure_message="Nexus failed to start!",
            ),
        ),
        notices=(
            "Ensure 'nexus' file ownership is changed to ec2-user or the intended user!",
        ),
        success_message="Nexus installed and running!",
    )


def terraform_step(app_settings: AppSettings) -> Step:
    return Step(
        identifier="terraform",
        label="Terraform",
        actions=(
            _package_install(app_settings, "yum-utils"),
            Action(
                argv=(
                    "yum-config-manager",
                    "--add-repo",
                    str(app_settings.hashicorp_repo_url),
                ),
                elevated=True,
            ),
            _package_install(app_settings, "terraform"),
        ),
        verification=Verification(commands=("terraform",)),
    )


def docker_step(app_settings: AppSettings) -> Step:
    work_dir = str(app_settings.work_dir)
    return Step(
        identifier="docker",
        label="Docker",
        actions=(
            Action(
                argv=(
                    "curl",
                    "-fsSL",
                    str(app_settings.docker_script_url),
                    "-o",
                    "get-docker.sh",
                ),
                cwd=work_dir,
            ),
            Action(argv=("sh", "get-docker.sh"), elevated=True, cwd=work_dir),
            # The script can exit 0 without leaving a docker binary behind.
            Action(
                argv=("sh", "-c", "command -v docker"),
                failure_message="ERROR: docker installation failed!",
            ),
            _enable_now("docker", "Docker failed to start!"),
        ),
        verification=Verification(commands=("docker",), services=("docker",)),
        success_message="Docker installed and running!",
    )


def kubernetes_step(app_settings: AppSettings) -> Step:
    return Step(
        identifier="kubernetes",
        label="Kubernetes",
        actions=(
            Action(
                argv=("tee", f"{YUM_REPOS_DIR}/kubernetes.repo"),
                elevated=True,
                stdin=KUBERNETES_REPO_TEMPLATE.format(
                    version=app_settings.kubernetes_version
                ),
            ),
            _package_install(
                app_settings, "kubectl", failure_message="Kubectl installation failed!"
            ),
        ),
        verification=Verification(commands=("kubectl",)),
    )


def prometheus_step(app_settings: AppSettings) -> Step:
    symbols = get_symbols(app_settings)
    work_dir = Path(app_settings.work_dir)
    release = f"prometheus-{app_settings.prometheus_version}.linux-amd64"
    archive = f"{release}.tar.gz"
    release_dir = str(work_dir / release)
    owner = "prometheus:prometheus"
    return Step(
        identifier="prometheus",
        label="Prometheus",
        actions=(
            Action(
                argv=(
                    "wget",
                    "https://github.com/prometheus/prometheus/releases/download/"
                    f"v{app_settings.prometheus_version}/{archive}",
                ),
                cwd=str(work_dir),
            ),
            Action(argv=("tar", "-xzf", archive), cwd=str(work_dir)),
            Action(argv=("groupadd", "-f", "--system", "prometheus"), elevated=True),
            # Exits 9 when the user already exists.
            Action(
                argv=(
                    "useradd",
                    "-s",
                    "/sbin/nologin",
                    "--system",
                    "-g",
                    "prometheus",
                    "prometheus",
                ),
                elevated=True,
                check=False,
            ),
            Action(
                argv=("cp", "prometheus", "promtool", LOCAL_BIN_DIR),
                elevated=True,
                cwd=release_dir,
            ),
            Action(
                argv=(
                    "chown",
                    owner,
                    f"{LOCAL_BIN_DIR}/prometheus",
                    f"{LOCAL_BIN_DIR}/promtool",
                ),
                elevated=True,
            ),
            Action(
                argv=("mkdir", "-p", "/etc/prometheus", "/var/lib/prometheus"),
                elevated=True,
            ),
            Action(
                argv=("cp", "prometheus.yml", "/etc/prometheus/"),
                elevated=True,
                cwd=release_dir,
            ),
            Action(
                argv=("chown", "-R", owner, "/etc/prometheus", "/var/lib/prometheus"),
                elevated=True,
            ),
            Action(
                argv=("tee", f"{SYSTEMD_UNIT_DIR}/prometheus.service"),
                elevated=True,
                stdin=PROMETHEUS_UNIT,
                status_lines=(
                    f"{symbols.get('success', '✅')} Prometheus installed successfully!",
                    f"{symbols.get('wrench', '🔧')} Setting up Prometheus as a service...",
                ),
            ),
            _daemon_reload(),
            _enable_now("prometheus", "Prometheus failed to start!"),
        ),
        verification=Verification(services=("prometheus",)),
        success_message="Prometheus service is running!",
    )


def grafana_step(app_settings: AppSettings) -> Step:
    return Step(
        identifier="grafana",
        label="Grafana",
        actions=(
            _package_install(
                app_settings,
                "https://dl.grafana.com/oss/release/"
                f"grafana-{app_settings.grafana_version}.x86_64.rpm",
            ),
            _daemon_reload(),
            _enable_now("grafana-server", "Grafana failed to start!"),
        ),
        verification=Verification(services=("grafana-server",)),
        success_message="Grafana installed and running!",
    )


STEP_BUILDERS = (
    git_step,
    maven_step,
    ansible_step,
    jenkins_step,
    sonarqube_step,
    nexus_step,
    terraform_step,
    docker_step,
    kubernetes_step,
    prometheus_step,
    grafana_step,
)


def build_steps(app_settings: AppSettings) -> List[Step]:
    """Build the tool steps in menu order."""
    return [builder(app_settings) for builder in STEP_BUILDERS]


def build_default_registry(app_settings: AppSettings) -> StepRegistry:
    """Register every tool step, in menu order, in a fresh registry."""
    registry = StepRegistry()
    for step in build_steps(app_settings):
        registry.register(step)
    return registry
