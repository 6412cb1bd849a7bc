"""Build information, overridden when a release is packaged."""

BUILD_TIME = "unset"
COMMIT = "unset"
RELEASE = "unset"