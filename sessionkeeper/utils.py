import platform
import os
import stat
import logging
import tempfile

from . import config

logger = logging.getLogger(__name__)

if platform.system() == "Windows":
    try:
        import win32security
        import win32api
        import win32con
        import win32file
        WINDOWS_SECURITY_AVAILABLE = True
    except ImportError:
        logger.warning("pywin32 not fully installed, cannot set Windows file permissions securely.")
        WINDOWS_SECURITY_AVAILABLE = False
else:
    WINDOWS_SECURITY_AVAILABLE = False


def _set_windows_file_permissions(filepath: str) -> bool:
    """
    Sets restrictive permissions on a file for Windows, granting full control
    only to the current user and removing access for others.
    """
    if not WINDOWS_SECURITY_AVAILABLE:
        logger.warning(f"Skipping Windows file permission setting for {filepath}: pywin32 not available.")
        return False

    try:
        current_user_name = win32api.GetUserName()
        current_user_sid, _, _ = win32security.LookupAccountName(None, current_user_name)

        dacl = win32security.ACL()
        dacl.AddAccessAllowedAce(
            win32security.ACL_REVISION,
            win32con.GENERIC_READ | win32con.GENERIC_WRITE,
            current_user_sid
        )

        file_handle = win32file.CreateFile(
            filepath,
            win32con.WRITE_DAC,
            win32file.FILE_SHARE_READ | win32file.FILE_SHARE_WRITE | win32file.FILE_SHARE_DELETE,
            None,
            win32con.OPEN_EXISTING,
            win32con.FILE_ATTRIBUTE_NORMAL,
            None
        )

        try:
            win32security.SetSecurityInfo(
                file_handle,
                win32security.SE_FILE_OBJECT,
                win32security.DACL_SECURITY_INFORMATION | win32security.PROTECTED_DACL_SECURITY_INFORMATION,
                None,
                None,
                dacl,
                None
            )
            logger.info(f"Set restrictive permissions for {filepath} on Windows.")
        finally:
            win32file.CloseHandle(file_handle)
    except win32api.error as e:
        if e.winerror == 5:  # Access is denied
            logger.warning(f"Could not harden Windows file permissions for {filepath}: Access is denied.")
            return True
        logger.error(f"Failed to set Windows file permissions for {filepath}: {e}")
        return False
    return True


def set_owner_only_permissions(filepath: str) -> bool:
    """Set file to be readable/writable by owner only."""
    if platform.system() == "Windows":
        return _set_windows_file_permissions(filepath)
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)  # 600
    except OSError as e:
        logger.warning(f"Failed to chmod {filepath}: {e}")
        return False
    return True


def atomic_write(filepath: str, data: bytes) -> None:
    """
    Replace filepath with data in a single rename.

    The data is written to a temporary file in the same directory, flushed to
    disk and moved over the target, so readers see either the old or the new
    content and never a partial file. The temporary file is removed on failure.
    """
    directory = os.path.dirname(os.path.abspath(filepath))
    fd, tmp_path = tempfile.mkstemp(
        prefix=os.path.basename(filepath) + ".",
        suffix=config.TEMP_FILE_SUFFIX,
        dir=directory,
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, filepath)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    if not set_owner_only_permissions(filepath):
        logger.warning(f"Failed to set secure file permissions for {filepath}. This might indicate a permission issue.")
