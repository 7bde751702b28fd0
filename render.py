import os
import sys
import warnings
from argparse import ArgumentParser
from pathlib import Path

import PIL.Image

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


from mandelbrot import BACKENDS, Canvas, RenderConfig, render
from mandelbrot.canvas import pil_format_name
from mandelbrot.viewport import DEFAULT_OUTPUT


def select_device(requested=None):
    """Pick the TensorFlow device for the tensorflow backend."""

    import tensorflow as tf

    if _suppress_messages:
        tf.get_logger().setLevel("ERROR")
        for handler in tf.get_logger().handlers:
            handler.setLevel("ERROR")

    log("TensorFlow version: %s" % tf.__version__)
    if requested is not None:
        return requested

    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def build_parser():
    # -h is the short form of --height, so help is only reachable as --help.
    parser = ArgumentParser(description="Mandelbrot image generator", add_help=False)

    parser.add_argument('--help', action='help',
                        help='show this help message and exit')

    parser.add_argument('-w', '--width', type=int,
                        dest='width', help='width of the image in pixels',
                        metavar='WIDTH', default=800)

    parser.add_argument('-h', '--height', type=int,
                        dest='height', help='height of the image in pixels',
                        metavar='HEIGHT', default=600)

    parser.add_argument('-d', '--max-depth', type=int,
                        dest='max_depth', help='maximum number of iterations per point',
                        metavar='MAX_DEPTH', default=100)

    parser.add_argument('--re-start', type=float,
                        dest='re_start', help='lower bound of the real axis',
                        metavar='RE_START', default=-2.0)

    parser.add_argument('--re-end', type=float,
                        dest='re_end', help='upper bound of the real axis',
                        metavar='RE_END', default=1.0)

    parser.add_argument('--im-start', type=float,
                        dest='im_start', help='lower bound of the imaginary axis',
                        metavar='IM_START', default=-1.0)

    parser.add_argument('--im-end', type=float,
                        dest='im_end', help='upper bound of the imaginary axis',
                        metavar='IM_END', default=1.0)

    parser.add_argument('-O', '--output', type=str,
                        dest='output', help='path of the image to write',
                        metavar='OUTPUT', default=DEFAULT_OUTPUT)

    parser.add_argument('--format', type=str,
                        dest='format', help='file format of the output. Can be any extension supported by Pillow. Default: taken from --output.',
                        metavar='FORMAT', default=None)

    parser.add_argument('--backend', choices=BACKENDS, default='python',
                        help='"python" evaluates pixel by pixel; "tensorflow" evaluates the whole grid at once.')

    parser.add_argument('--device', type=str, default=None,
                        help='TensorFlow device for the tensorflow backend (e.g. "/CPU:0"). Default: first GPU if any, else CPU.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def resolve_output_path(opt, parser: ArgumentParser) -> tuple[Path, str]:
    output_arg = opt.output
    if str(output_arg).endswith(tuple(filter(None, {os.sep, os.altsep}))):
        parser.error("--output must be a file path.")
    output_path = Path(output_arg).expanduser()
    if output_path.exists() and output_path.is_dir():
        parser.error("--output must point to a file, not a directory.")

    image_format = (opt.format or "").lower().lstrip(".")
    suffix = output_path.suffix
    if image_format:
        expected_suffix = f".{image_format}"
        if suffix:
            if suffix.lower() != expected_suffix:
                parser.error(f"--output extension {suffix} does not match --format {image_format}.")
        else:
            output_path = output_path.with_suffix(expected_suffix)
    else:
        image_format = suffix.lower().lstrip(".") or "png"
        if not suffix:
            output_path = output_path.with_suffix(".png")

    PIL.Image.init()
    if pil_format_name(image_format) not in PIL.Image.SAVE:
        parser.error(f"Pillow cannot write the '{image_format}' format.")

    return output_path.resolve(), image_format


def build_config(opt, output_path: Path, parser: ArgumentParser) -> RenderConfig:
    try:
        return RenderConfig(
            width=opt.width,
            height=opt.height,
            max_depth=opt.max_depth,
            re_start=opt.re_start,
            re_end=opt.re_end,
            im_start=opt.im_start,
            im_end=opt.im_end,
            output=output_path,
        )
    except ValueError as exc:
        parser.error(str(exc))


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    output_path, image_format = resolve_output_path(opt, parser)
    config = build_config(opt, output_path, parser)

    device = opt.device
    if opt.backend == 'tensorflow':
        device = select_device(device)

    log("Rendering %dx%d, max depth %d, re [%g, %g], im [%g, %g] with the %s backend"
        % (config.width, config.height, config.max_depth,
           config.re_start, config.re_end, config.im_start, config.im_end, opt.backend))

    def report(done, total):
        log("column {0} out of {1}".format(done, total), end='\r')

    canvas = Canvas(config.width, config.height)
    render(config, canvas, backend=opt.backend, device=device, progress=report)
    log("")

    try:
        saved = canvas.save(config.output, image_format)
    except OSError as exc:
        parser.exit(1, f"{parser.prog}: error: could not write {config.output}: {exc}\n")

    log("Saved %s" % saved)
    return 0


if __name__ == '__main__':
    sys.exit(main())
