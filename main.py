# main.py
"""
Main entry point for the Particle Playground.

This script orchestrates the entire session lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Sets up the window, particle field and simulation loop.
4. Runs the frame loop until the window is closed.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import numpy as np
import cProfile
import pstats
import io

def main():
    """
    The main function to run the playground.
    """
    # Load configuration from the JSON file first.
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Particle Playground Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})

    from constants import DEFAULT_MAX_PARTICLES, DEFAULT_NEIGHBOR_COUNT
    from particle import ParticleField
    from simulation import SimulationLoop, load_spawn_presets
    from visualization import Visualizer

    # --- Component Initialization ---
    presets = load_spawn_presets(config)

    # 1. Initialize the visualizer first. It determines the viewport size.
    visualizer = Visualizer(presets)

    # 2. Rule 12: One master seed drives every random draw.
    rng = np.random.default_rng(sim_params.get('seed'))
    field = ParticleField(sim_params.get('max_particles', DEFAULT_MAX_PARTICLES), rng)

    # 3. The loop draws straight onto the visualizer's simulation surface.
    loop = SimulationLoop(
        field,
        visualizer.sim_surface,
        shape=sim_params.get('shape', 'Circle'),
        motion=sim_params.get('motion', 'Straight'),
        draw_lines=sim_params.get('draw_lines', True),
        neighbor_count=sim_params.get('neighbor_count', DEFAULT_NEIGHBOR_COUNT),
    )

    # --- Profiler Setup (Rule 11) ---
    profiler = cProfile.Profile()

    log_throttle = run_params.get('log_throttle_steps', 300)
    max_steps = run_params.get('max_steps')  # None runs until the window closes

    profiler.enable()
    frames = loop.run(visualizer.frames(loop), max_frames=max_steps, log_throttle=log_throttle)
    profiler.disable()

    visualizer.close()
    logging.info(f"Frame loop finished after {frames} frames.")

    # --- Performance Profile Output (Rule 11 & 2) ---
    logging.info("--- Performance Profile ---")
    s = io.StringIO()
    # Sort by cumulative time spent in the function
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20) # Print top 20 slowest functions
    logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Playground Shutting Down ---")


if __name__ == "__main__":
    main()
