"""wsgen - build and run schemes of generated Xcode workspaces."""

__version__ = "0.1.0"
