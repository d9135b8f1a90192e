"""
scikit-density
==============

scikit-density provides fast estimators of Gaussian kernel density derivatives for
one-dimensional samples, such as particle coordinates collected along the axis of
a channel in molecular dynamics simulations. It follows the `scikit-learn
<https://scikit-learn.org/>`_ API and coding guidelines to promote usability and
interoperability with existing workflows.
"""

__version__ = "0.1.0"
