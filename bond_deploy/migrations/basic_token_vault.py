"""Deploy the bond token, then the vault that receives it."""


def migrate(deployer):
    deployer.deploy("BondToken.sol")
    token = deployer.deployed("BondToken")
    deployer.deploy("TokenVault", token.address)
