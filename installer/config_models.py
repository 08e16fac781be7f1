# installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the installer,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from pathlib import Path
from typing import Dict

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from installer.config import LOG_FILE_DEFAULT, SYMBOLS

# --- Default Static Values (can be overridden by config file/env) ---
PACKAGE_MANAGER_DEFAULT: str = "yum"

SONARQUBE_VERSION_DEFAULT: str = "9.9.7.96285"
NEXUS_VERSION_DEFAULT: str = "3.78.2-04"
PROMETHEUS_VERSION_DEFAULT: str = "3.2.1"
GRAFANA_VERSION_DEFAULT: str = "11.5.2-1"
KUBERNETES_VERSION_DEFAULT: str = "v1.32"

EPEL_RELEASE_URL_DEFAULT: str = "https://dl.fedoraproject.org/pub/epel/epel-release-latest-9.noarch.rpm"
JENKINS_REPO_URL_DEFAULT: str = "https://pkg.jenkins.io/redhat-stable/jenkins.repo"
JENKINS_KEY_URL_DEFAULT: str = "https://pkg.jenkins.io/redhat-stable/jenkins.io-2023.key"
HASHICORP_REPO_URL_DEFAULT: str = "https://rpm.releases.hashicorp.com/RHEL/hashicorp.repo"
DOCKER_SCRIPT_URL_DEFAULT: str = "https://get.docker.com"

SYMBOLS_DEFAULT: Dict[str, str] = dict(SYMBOLS)


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_prefix="DEVOPS_", extra="ignore")

    log_file: str = Field(default=LOG_FILE_DEFAULT,
                          description="Append-only log file shared by every step.")
    log_level: str = Field(default="INFO", description="Root logging level.")
    log_command_output: bool = Field(default=False,
                                     description="Capture stdout/stderr of external commands into the log.")

    package_manager: str = Field(default=PACKAGE_MANAGER_DEFAULT,
                                 description="Host package manager command (yum or dnf).")
    work_dir: Path = Field(default_factory=Path.home,
                           description="Directory where release archives are downloaded and extracted.")

    sonarqube_version: str = Field(default=SONARQUBE_VERSION_DEFAULT)
    nexus_version: str = Field(default=NEXUS_VERSION_DEFAULT)
    prometheus_version: str = Field(default=PROMETHEUS_VERSION_DEFAULT)
    grafana_version: str = Field(default=GRAFANA_VERSION_DEFAULT)
    kubernetes_version: str = Field(default=KUBERNETES_VERSION_DEFAULT,
                                    description="Minor release stream of the pkgs.k8s.io repository.")

    epel_release_url: HttpUrl = Field(default=EPEL_RELEASE_URL_DEFAULT)
    jenkins_repo_url: HttpUrl = Field(default=JENKINS_REPO_URL_DEFAULT)
    jenkins_key_url: HttpUrl = Field(default=JENKINS_KEY_URL_DEFAULT)
    hashicorp_repo_url: HttpUrl = Field(default=HASHICORP_REPO_URL_DEFAULT)
    docker_script_url: HttpUrl = Field(default=DOCKER_SCRIPT_URL_DEFAULT)

    # Static symbols, could also be loaded from a separate static config if preferred
    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))
