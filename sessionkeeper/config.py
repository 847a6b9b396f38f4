"""
Configuration constants for the SessionKeeper application.
"""

import os

# Application Metadata
APP_VERSION = "1.0"  # Use: Current version of the application. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_NAME = "SessionKeeper"  # Use: Full name of the application. Type: str. Range: Any valid string.
APP_DISCLAIMER = """  # Use: Legal disclaimer for the application. Type: str (multi-line). Range: Any valid string.
This tool is for personal use only. It stores session tokens for accounts you
own, encrypted on the device where it is installed. It must never be used to
store or export credentials for accounts you do not own.
"""

# Security Settings
KEY_SIZE = 32  # Use: Size of the vault encryption key in bytes. Corresponds to AES-256. Type: int. Range: 32 bytes (AES-256) only.
NONCE_SIZE = 12  # Use: Size of the Nonce (Number used once) in bytes for AES-GCM. Type: int. Range: 12 bytes (96 bits) is the recommended size for GCM.
TAG_SIZE = 16  # Use: Size of the authentication tag in bytes for AES-GCM. Type: int. Range: 16 bytes (128 bits) is the recommended size for GCM.
PBKDF2_ITERATIONS = 100000  # Use: Number of iterations for PBKDF2-HMAC-SHA256 vault key derivation. Type: int. Range: At least 100,000; changing it invalidates every existing vault.
KDF_SALT_PREFIX = "SESSIONKEEPER-VAULT-"  # Use: Fixed prefix joined with the hardware identity to form the PBKDF2 salt. Type: str. Range: Any string; changing it invalidates every existing vault.
HARDWARE_ID_PREFIX = "SESSIONKEEPER"  # Use: Prefix for hardware identity strings produced by the identity providers. Type: str. Range: Any non-empty string.
VERIFICATION_PLAINTEXT = "SESSIONKEEPER_VAULT_V1"  # Use: Known plaintext encrypted at vault creation to verify candidate keys on unlock. Type: str. Range: Any string; must never change for existing vaults.

# Vault File Format
VAULT_VERSION = 1  # Use: Version tag written to new vault files. Type: int. Range: Positive integer.
VAULT_FILE_ENCODING = "utf-8"  # Use: Text encoding of the JSON vault file. Type: str. Range: Any codec name accepted by open().
VAULT_JSON_INDENT = 2  # Use: Indentation used when writing the vault JSON. Type: int. Range: Non-negative integer.
TEMP_FILE_SUFFIX = ".tmp"  # Use: Suffix for the temporary file written before an atomic replace. Type: str. Range: Any valid filename suffix.

# Machine identity sources
MACHINE_ID_PATHS = [  # Use: Files consulted for a stable machine identifier on Linux and other Unix systems. Type: list[str]. Range: List of absolute file paths.
    "/etc/machine-id",
    "/var/lib/dbus/machine-id",
]
WINDOWS_CRYPTOGRAPHY_KEY = r"SOFTWARE\Microsoft\Cryptography"  # Use: Registry key (under HKEY_LOCAL_MACHINE) holding the Windows MachineGuid. Type: str. Range: Valid registry path.
WINDOWS_MACHINE_GUID_VALUE = "MachineGuid"  # Use: Registry value name holding the Windows machine GUID. Type: str. Range: Valid registry value name.

# Cookie Export Settings
COOKIE_DOMAIN = ".roblox.com"  # Use: Domain of the session cookie written to the client's cookie store. Type: str. Range: Valid cookie domain.
COOKIE_NAME = ".ROBLOSECURITY"  # Use: Name of the session cookie the client authenticates with. Type: str. Range: Valid cookie name.
COOKIE_PATH = "/"  # Use: Default path of exported cookies. Type: str. Range: Valid URL path.
COOKIE_LIFETIME_DAYS = 30  # Use: Default lifetime of an exported cookie when no expiration is given. Type: int. Range: Positive integer.
COOKIE_STORE_FILENAMES = [  # Use: Cookie store files, relative to the client's profile home, that receive the exported container. Type: list[str]. Range: List of relative paths.
    os.path.join("Library", "HTTPStorages", "com.roblox.RobloxPlayer.binarycookies"),
    os.path.join("Library", "Cookies", "Cookies.binarycookies"),
    os.path.join("Library", "Cookies", "com.roblox.RobloxPlayer.binarycookies"),
]

# File and Directory Names
CONFIG_DIR_NAME = ".sessionkeeper"  # Use: Name of the hidden directory within the user's home directory where SessionKeeper stores its data files. Type: str. Range: Any valid directory name.
DEFAULT_VAULT_FILE = "vault.dat"  # Use: Default filename for the encrypted account vault. Type: str. Range: Any valid filename.
APP_HOME = os.environ.get(  # Use: Data directory for the vault; override with SESSIONKEEPER_HOME. Type: str. Range: Valid directory path.
    "SESSIONKEEPER_HOME",
    os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME),
)
VAULT_FILE = os.environ.get("SESSIONKEEPER_VAULT_FILE", DEFAULT_VAULT_FILE)  # Use: Vault filename inside APP_HOME; override with SESSIONKEEPER_VAULT_FILE. Type: str. Range: Any valid filename.


def get_default_vault_path() -> str:
    """Get the default path for the encrypted vault file."""
    return os.path.join(APP_HOME, VAULT_FILE)
