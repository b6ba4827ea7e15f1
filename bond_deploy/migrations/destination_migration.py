"""Deploy the destination-chain token manager and bond token."""

# Constructor arguments of DestinationBondToken, in declaration order
DESTINATION_TOKEN_ARGS = (
    "",
    "",
    "",
    1,
    "0x8f7DBcC2B17F7696bC738E8f526042b2a176Ad95",
    "1",
)


def migrate(deployer):
    deployer.deploy("DesinationTokenManager")
    deployer.deploy("DestinationBondToken", *DESTINATION_TOKEN_ARGS)
