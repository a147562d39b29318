"""Running statistics used for throughput/ETA estimates."""
