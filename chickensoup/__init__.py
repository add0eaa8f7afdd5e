"""
Healing Chicken Soup
====================

An ambient toy: translucent oil droplets float on a bowl of broth.

Droplets drift and bump into each other and the bowl's rim.  Clicking
the boundary between two neighbouring droplets merges them into one
droplet of the same total area:

  - Brownian drift with per-frame damping
  - Inelastic wall bounces (restitution 0.5)
  - Soft collisions, split by mass ∝ r² so big droplets barely budge
  - Pointer repulsion while playing
  - Merge radius √(r₁² + r₂²), radius-weighted centroid
  - A "stir" hint when nothing is left within merging distance

The simulation core (droplets, engine, merge, renderer, simulation) has
no Qt dependency; the canvas / controls / main_window modules host it in
a PyQt5 window.
"""

__version__ = "1.0.0"
__author__ = "Healing Chicken Soup"
