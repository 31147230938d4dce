import click
import functools
import logging
import traceback
import yaml

from .config import Config
from .builder import Builder
from .targets import TARGETS
from .utils import setup_logger, parse_module_levels
from .exceptions import (
    BMCBuilderError,
    ConfigurationError,
    DefinitionError,
    HostError,
    BuildError,
)
from . import __version__

# click parameter name -> BuildParameters field
PARAM_OPTIONS = {
    "target": "target",
    "distro": "distro",
    "img_tag": "img_tag",
    "launch": "launch",
    "workspace": "workspace",
    "proxy": "http_proxy",
    "obmc_dir": "obmc_dir",
    "ssc_dir": "ssc_dir",
    "build_dir": "build_dir",
    "xtrct_path": "xtrct_path",
    "xtrct_small_copy_dir": "xtrct_small_copy_dir",
    "xtrct_copy_timeout": "xtrct_copy_timeout",
    "num_cpu": "num_cpu",
    "bitbake_opts": "bitbake_opts",
    "img_name": "img_name",
    "build_scripts_dir": "build_scripts_dir",
}


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    setup_logger(debug=debug, module_levels=parse_module_levels(log_levels), log_file=log_file)


def param_options(func):
    """Attach one option per build parameter, plus the YAML parameters file."""
    options = [
        click.option('-c', '--config', 'config_file', type=click.Path(dir_okay=False), help='YAML file with build parameters'),
        click.option('-t', '--target', help='Build target, e.g. qemu, romulus, witherspoon'),
        click.option('--distro', type=click.Choice(['ubuntu', 'fedora']), help='Base distro of the build image'),
        click.option('--img-tag', help='Tag of the base distro image'),
        click.option('--launch', help="Dispatch mode: '' (docker), job or pod; an explicit '' overrides the environment"),
        click.option('-w', '--workspace', help='Workspace directory for generated files'),
        click.option('--proxy', help='HTTP proxy URL used inside the build'),
        click.option('--obmc-dir', help='OpenBMC source tree (cloned if missing)'),
        click.option('--ssc-dir', help='BitBake shared-state cache directory'),
        click.option('--build-dir', help='BitBake TMPDIR inside the container'),
        click.option('--xtrct-path', help='Where build output is copied to'),
        click.option('--xtrct-small-copy-dir', help="Subdirectory of build-dir to copy, '' for all of it"),
        click.option('--xtrct-copy-timeout', type=int, help='Timeout in seconds for the artifact copy'),
        click.option('--num-cpu', type=int, help='CPUs given to the build container'),
        click.option('--bitbake-opts', help='Extra options passed to bitbake'),
        click.option('--img-name', help='Name of the generated build image'),
        click.option('--build-scripts-dir', help='Directory holding kubernetes/kubernetes-launch.sh'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def collect_overrides(kwargs: dict) -> dict:
    return {
        field: kwargs[name]
        for name, field in PARAM_OPTIONS.items()
        if kwargs.get(name) is not None
    }


def handle_errors(func):
    """Decorator to handle common exceptions"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _report(f"Configuration error: {e}")
        except DefinitionError as e:
            _report(f"Definition error: {e}")
        except HostError as e:
            _report(f"Host error: {e}")
        except BuildError as e:
            _report(f"Build error: {e}")
        except BMCBuilderError as e:
            _report(f"An unexpected application error occurred: {e}")
        except OSError as e:
            _report(f"A system error occurred: {e}")
    return wrapper


def _report(message: str):
    logging.error(message)
    ctx = click.get_current_context()
    if ctx.obj and ctx.obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


@handle_errors
def do_build(config_file: str, overrides: dict):
    """Execute build command"""
    config = Config(overrides=overrides, config_file=config_file)
    builder = Builder(config)
    link = builder.run()
    logging.info(f"Build output linked at '{link}'")


@handle_errors
def do_dockerfile(config_file: str, overrides: dict):
    """Print the image definition"""
    config = Config(overrides=overrides, config_file=config_file)
    click.echo(Builder(config).create_image().generate())


@handle_errors
def do_script(config_file: str, overrides: dict):
    """Print the launch script"""
    config = Config(overrides=overrides, config_file=config_file)
    click.echo(Builder(config).create_script().render(), nl=False)


@handle_errors
def do_params(config_file: str, overrides: dict):
    """Print the resolved parameters"""
    config = Config(overrides=overrides, config_file=config_file)
    click.echo(yaml.safe_dump(config.params.model_dump(mode='json'), sort_keys=False), nl=False)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'conf=DEBUG,launch=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='bmcbuilder')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """BMC Builder - Build OpenBMC firmware inside a container

    \b
    Parameters come from, lowest precedence first: defaults, a YAML file
    (-c), environment variables (target, distro, WORKSPACE, ...), options.

    \b
    Examples:
      bmcb build -t romulus             Build romulus with Docker
      target=zaius launch=pod bmcb build
      bmcb dockerfile --distro fedora   Show the build image definition
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@param_options
@click.pass_context
def build(ctx, config_file, **kwargs):
    """Build the image, run the build and extract artifacts"""
    do_build(config_file, collect_overrides(kwargs))


@cli.command()
@param_options
@click.pass_context
def dockerfile(ctx, config_file, **kwargs):
    """Print the generated build image definition"""
    do_dockerfile(config_file, collect_overrides(kwargs))


@cli.command()
@param_options
@click.pass_context
def script(ctx, config_file, **kwargs):
    """Print the generated in-container build.sh"""
    do_script(config_file, collect_overrides(kwargs))


@cli.command()
@param_options
@click.pass_context
def params(ctx, config_file, **kwargs):
    """Print the resolved build parameters as YAML"""
    do_params(config_file, collect_overrides(kwargs))


@cli.command()
def targets():
    """List the known build targets"""
    for name, target in sorted(TARGETS.items()):
        mapping = target.layer_dir or f"MACHINE={target.machine}"
        click.echo(f"{name:<15} {mapping}")
