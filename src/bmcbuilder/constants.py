# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "conf": "bmcbuilder.config",
    "cfg": "bmcbuilder.config",
    "tgt": "bmcbuilder.targets",
    "img": "bmcbuilder.images",
    "image": "bmcbuilder.images",
    "script": "bmcbuilder.script",
    "sh": "bmcbuilder.script",
    "launch": "bmcbuilder.launcher",
    "lch": "bmcbuilder.launcher",
    "build": "bmcbuilder.builder.build",
    "bld": "bmcbuilder.builder.build",
    "ws": "bmcbuilder.builder.workspace",
    "io": "bmcbuilder.io",
    "fs": "bmcbuilder.io.fs",
}

# Top-level modules within bmcbuilder for auto-prefixing
KNOWN_TOP_MODULES = {
    "builder",
    "config",
    "images",
    "io",
    "launcher",
    "script",
    "targets",
    "utils",
}

LOG_LEVELS_ENV = "BMCB_LOG_LEVELS"


# --- Host Architecture ---
# machine name -> prefix of the Dockerfile's base image
ARCH_IMAGE_PREFIX = {
    "ppc64le": "ppc64le/",
    "x86_64": "",
}


# --- Parameters ---
# field name -> environment variable it is read from
PARAM_ENV_VARS = {
    "build_scripts_dir": "build_scripts_dir",
    "http_proxy": "http_proxy",
    "workspace": "WORKSPACE",
    "num_cpu": "num_cpu",
    "build_dir": "build_dir",
    "distro": "distro",
    "img_tag": "img_tag",
    "target": "target",
    "launch": "launch",
    "obmc_dir": "obmc_dir",
    "ssc_dir": "ssc_dir",
    "xtrct_small_copy_dir": "xtrct_small_copy_dir",
    "xtrct_path": "xtrct_path",
    "xtrct_copy_timeout": "xtrct_copy_timeout",
    "bitbake_opts": "BITBAKE_OPTS",
    "img_name": "img_name",
}

# Keys an explicit source (YAML file, CLI) may set to the empty string
EXPLICIT_EMPTY_KEYS = {"xtrct_small_copy_dir", "launch"}

DEFAULT_BUILD_DIR = "/tmp/openbmc"
DEFAULT_DISTRO = "ubuntu"
DEFAULT_IMG_TAG = "latest"
DEFAULT_TARGET = "qemu"
DEFAULT_SMALL_COPY_DIR = "deploy/images"
DEFAULT_COPY_TIMEOUT = 300

# $RANDOM range used for the default workspace name
RANDOM_MAX = 32767

SUPPORTED_DISTROS = ["ubuntu", "fedora"]


# --- Firmware Source ---
OPENBMC_REPO_URL = "https://github.com/openbmc/openbmc"
OBMC_SUBDIR = "openbmc"
XTRCT_SUBPATH = "build/tmp"


# --- Build Targets ---
# target -> TEMPLATECONF layer directory
TARGET_LAYERS = {
    "palmetto": "meta-ibm/meta-palmetto",
    "witherspoon": "meta-ibm/meta-witherspoon",
    "evb-ast2500": "meta-evb/meta-evb-aspeed/meta-evb-ast2500",
    "s2600wf": "meta-intel/meta-s2600wf",
    "zaius": "meta-ingrasys/meta-zaius",
    "romulus": "meta-ibm/meta-romulus",
    "qemu": "meta-phosphor",
}

# targets selected through MACHINE instead of TEMPLATECONF
MACHINE_TARGETS = {"qemux86-64"}

BITBAKE_INIT_SCRIPT = "oe-init-build-env"
BITBAKE_IMAGE = "obmc-phosphor-image"
LOCAL_CONF = "conf/local.conf"


# --- Filenames and Paths ---
DOCKERFILE_NAME = "Dockerfile"
BUILD_SCRIPT_NAME = "build.sh"
BIN_SUBDIR = "bin"
GIT_PROXY_NAME = "git-proxy"
SVN_SERVERS_PATH = ".subversion/servers"
DEPLOY_LINK_NAME = "deploy"
SYSTEM_PATH = "/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"


# --- Launch ---
LAUNCH_DOCKER = ""
LAUNCH_JOB = "job"
LAUNCH_POD = "pod"
CLUSTER_MODES = {LAUNCH_JOB, LAUNCH_POD}
CLUSTER_JOB_NAME = "OpenBMC-build"
CLUSTER_LAUNCH_SCRIPT = "kubernetes/kubernetes-launch.sh"
DOCKER_CAP_ADD = ["sys_admin"]
DOCKER_NETWORK = "host"

COPY_TIMEOUT_MESSAGE = "Received a non-zero exit code from timeout"
