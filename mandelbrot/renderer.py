"""Vectorized TensorFlow evaluation of the escape-time estimator."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .escape import ESCAPE_RADIUS, RenderResult
from .viewport import RenderConfig, sample_axes


@tf.function
def _mandelbrot_step(zs: tf.Tensor, cs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor]:
    """Perform a single Mandelbrot iteration for points that have not escaped."""

    zs_new = zs * zs + cs
    zs = tf.where(active, zs_new, zs)
    ns = ns + tf.cast(active, ns.dtype)
    radius = tf.constant(ESCAPE_RADIUS, dtype=tf.float64)
    new_active = tf.logical_and(active, tf.abs(zs) <= radius)
    return zs, ns, new_active


@tf.function
def _mandelbrot_run(cs: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, max_depth: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Iterate the Mandelbrot formula using a TensorFlow while loop."""

    i = tf.constant(0, dtype=tf.int64)
    active = tf.ones_like(ns, tf.bool)

    def cond(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, max_depth), tf.reduce_any(active))

    def body(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        zs, ns, active = _mandelbrot_step(zs, cs, ns, active)
        return i + 1, zs, ns, active

    return tf.while_loop(cond, body, (i, zs, ns, active))


def estimate_grid(config: RenderConfig, *, device: Optional[str] = None) -> RenderResult:
    """Smoothed escape measurements for the whole viewport of ``config``."""

    re_axis, im_axis = sample_axes(config)
    max_depth = tf.constant(config.max_depth, dtype=tf.int64)

    with tf.device(device if device is not None else "/CPU:0"):
        re_tf = tf.convert_to_tensor(re_axis, dtype=tf.float64)
        im_tf = tf.convert_to_tensor(im_axis, dtype=tf.float64)
        X, Y = tf.meshgrid(re_tf, im_tf)
        cs = tf.complex(X, Y)
        zs = tf.zeros_like(cs)
        ns = tf.zeros(tf.shape(cs), dtype=tf.int64)

        _, zs, ns, _ = _mandelbrot_run(cs, zs, ns, max_depth)

        az = tf.abs(zs)
        radius = tf.constant(ESCAPE_RADIUS, dtype=az.dtype)
        outside = tf.greater(az, radius)
        # Non-escaped lanes are clamped so the discarded branch stays finite.
        log_log_az = tf.math.log(tf.math.log(tf.maximum(az, radius)))
        log2 = tf.math.log(tf.constant(2.0, dtype=az.dtype))
        smooth_escape = tf.cast(ns, tf.float64) - log_log_az / log2
        smooth = tf.where(outside, smooth_escape, tf.cast(max_depth, tf.float64))

    smooth = smooth.numpy()
    return RenderResult(smooth=smooth, escaped=smooth < np.float64(config.max_depth))
