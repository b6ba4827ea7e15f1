"""
Bond Token Deployment Toolkit
=============================

Scripts for deploying the bond token contracts to Ethereum and Celo networks.

Structure:
- accounts: Signing identities loaded from (or generated into) secret files
- networks: RPC endpoints, chain ids and compiler settings per network
- deployer: Contract deployment and confirmation tracking
- migrations/: Numbered deployment steps
- cli: The ``bond-deploy`` command
"""

__version__ = "1.0.0"
