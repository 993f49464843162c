from sparse_matrix.config.matrix_config import MatrixConfig, MatrixConfigLoader, configure_logging

__all__ = [
    "MatrixConfig",
    "MatrixConfigLoader",
    "configure_logging",
]
