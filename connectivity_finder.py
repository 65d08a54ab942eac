from __future__ import annotations

import argparse
import json
import os
import subprocess
import time

import yaml

from boundary import boundary_counts
from calibration import spatial_unit
from connectivity import compute_connectivity
from io_bridge import IOConfig, load_volume
from volume import Volume, count_particles


def parse_config(path: str) -> dict:
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    return cfg or {}


def _git_rev() -> str:
    try:
        return subprocess.check_output(["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def main(argv=None) -> dict:
    ap = argparse.ArgumentParser(description="Euler characteristic and connectivity density of a binary 3-D image.")
    ap.add_argument("--config", help="YAML file; command-line flags override its keys.")
    ap.add_argument("--input", dest="input_path", help=".npy or .npz image stack")
    ap.add_argument("--key", dest="input_key", help="array name inside an .npz archive")
    ap.add_argument("--threshold", type=float)
    ap.add_argument("--cut-op", dest="cut_op", choices=["lt", "gt"])
    ap.add_argument("--scale", nargs=3, type=float, metavar=("SU", "SV", "SW"),
                    help="calibrated voxel size along u, v, w")
    ap.add_argument("--unit", help="spatial unit of the scale, e.g. mm")
    ap.add_argument("--chunks", type=int, help="number of w-plane ranges accumulated separately")
    ap.add_argument("--output", dest="output_path", help="write results as JSON here")
    ap.add_argument("--profile", action="store_true")
    args = ap.parse_args(argv)

    cfg = parse_config(args.config) if args.config else {}
    for key in ("input_path", "input_key", "threshold", "cut_op", "scale", "unit", "chunks", "output_path"):
        val = getattr(args, key)
        if val is not None:
            cfg[key] = val
    if args.profile:
        cfg["profile"] = True

    if not cfg.get("input_path"):
        raise ValueError("input_path must be provided (config key or --input)")
    scale = tuple(float(s) for s in (cfg.get("scale") or [1.0, 1.0, 1.0]))
    unit = cfg.get("unit")
    if isinstance(unit, (list, tuple)):
        unit = spatial_unit(unit)
    chunks = int(cfg.get("chunks") or 1)
    profile = bool(cfg.get("profile", False))

    io_cfg = IOConfig(
        input_path=str(cfg["input_path"]),
        input_key=cfg.get("input_key"),
        threshold=cfg.get("threshold"),
        cut_op=str(cfg.get("cut_op") or "gt"),
    )

    t0 = time.time()
    volume = Volume(load_volume(io_cfg), scale=scale, unit=unit)
    t_load = time.time()

    nfg = volume.foreground_count()
    if nfg == 0:
        print("WARNING: image has no foreground voxels; connectivity is trivially 1.")
    else:
        nparts = count_particles(volume)
        if nparts > 1:
            print(f"WARNING: foreground has {nparts} separate particles; connectivity assumes a single structure.")

    res = compute_connectivity(volume, chunks=chunks)
    t_euler = time.time()
    counts = boundary_counts(volume)
    t_done = time.time()

    chi, dchi, conn, density = res.euler_characteristic, res.delta_chi, res.connectivity, res.connectivity_density
    results = res.as_dict()

    unit_label = f" {volume.unit}^-3" if volume.unit else ""
    print(f"shape={volume.shape} scale={volume.scale} foreground={nfg}")
    print(f"Euler char. (χ): {chi:g}")
    print(f"Corr. Euler (Δχ): {dchi:g}")
    print(f"Connectivity: {conn:g}")
    print(f"Conn.D: {density:g}{unit_label}")

    if cfg.get("output_path"):
        meta = {
            "results": results,
            "boundary": counts.as_dict(),
            "grid": {
                "shape": [int(n) for n in volume.shape],
                "scale": list(volume.scale),
                "unit": volume.unit,
                "foreground_voxels": int(nfg),
            },
            "times": {
                "load": float(t_load - t0),
                "connectivity": float(t_euler - t_load),
                "boundary": float(t_done - t_euler),
            },
            "git_rev": _git_rev(),
            "config": cfg,
        }
        out_dir = os.path.dirname(os.path.abspath(cfg["output_path"]))
        os.makedirs(out_dir, exist_ok=True)
        with open(cfg["output_path"], "w") as f:
            json.dump(meta, f, indent=2)

    if profile:
        print(f"times: load={t_load-t0:.2f}s connectivity={t_euler-t_load:.2f}s boundary={t_done-t_euler:.2f}s")

    return results


if __name__ == "__main__":
    main()
