#!/usr/bin/env python3
"""
Quick Start - Minimal example to get started with GA Lab.

Runs a simple GA and CHC on the sphere function and prints how close
each gets to the minimum.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from galab import AlgorithmConfig, SimpleGA, CHC, get_function

print("GA Lab - Quick Start")
print("="*40)

# De Jong F1: sum of squares over three variables
sphere = get_function('dejong1')
print(f"\nFunction: dejong1 on {sphere.x_range()}, minimum {sphere.min_y()}")

config = AlgorithmConfig(
    population_size=50,
    num_generations=60,
    crossover_prob=0.7,
    mutation_prob=0.005,
    bits_per_variable=16,   # 16 bits per variable
    num_variables=3,
)

for algorithm_cls in (SimpleGA, CHC):
    print(f"\nRunning {algorithm_cls.name}...")
    records = algorithm_cls(config, sphere, seed=42).run()
    final = records[-1]
    print(f"  Best value:    {final.best_value:.6f}")
    print(f"  Best solution: {', '.join(f'{x:.4f}' for x in final.best_solution)}")

print("\nTry another function (dejong2 .. dejong5) or change the rates!")
