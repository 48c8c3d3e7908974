"""
tfsetup — detect, check and install the Terraform toolchain.
"""

__version__ = "1.0.0"
