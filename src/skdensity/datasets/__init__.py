from ._samples_generator import make_gaussian_mixture

__all__ = ["make_gaussian_mixture"]
