"""Report facts about the host: platform, architecture, OS version and ids."""

from __future__ import annotations

import platform
import sys
import uuid
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from pathlib import Path
from typing import Callable, Optional

from minkit.outlet import Outlet

VER_PLATFORM_WIN32_NT = 2
VER_NT_WORKSTATION = 1

PROCESSOR_ARCHITECTURE_INTEL = 0
PROCESSOR_ARCHITECTURE_IA64 = 6
PROCESSOR_ARCHITECTURE_AMD64 = 9
PROCESSOR_ARCHITECTURE_ARM64 = 12

_DISPLAY_LIMIT = 255
_UNEXPECTED_WINDOWS = "Unexpected version of Microsoft Windows"


class Suite(IntFlag):
    """Product suites reported in a Windows version's suite mask."""

    ENTERPRISE = 0x0002
    DATACENTER = 0x0080
    PERSONAL = 0x0200
    BLADE = 0x0400
    STORAGE_SERVER = 0x2000
    COMPUTE_SERVER = 0x4000
    WH_SERVER = 0x8000


class Product(IntEnum):
    """Windows product types as reported by the product-info query."""

    ULTIMATE = 0x01
    HOME_BASIC = 0x02
    HOME_PREMIUM = 0x03
    ENTERPRISE = 0x04
    BUSINESS = 0x06
    STANDARD_SERVER = 0x07
    DATACENTER_SERVER = 0x08
    SMALLBUSINESS_SERVER = 0x09
    ENTERPRISE_SERVER = 0x0A
    STARTER = 0x0B
    DATACENTER_SERVER_CORE = 0x0C
    STANDARD_SERVER_CORE = 0x0D
    ENTERPRISE_SERVER_CORE = 0x0E
    ENTERPRISE_SERVER_IA64 = 0x0F
    WEB_SERVER = 0x11
    CLUSTER_SERVER = 0x12
    SMALLBUSINESS_SERVER_PREMIUM = 0x19
    PROFESSIONAL = 0x30


_PRODUCT_EDITIONS = {
    Product.ULTIMATE: "Ultimate Edition",
    Product.PROFESSIONAL: "Professional",
    Product.HOME_PREMIUM: "Home Premium Edition",
    Product.HOME_BASIC: "Home Basic Edition",
    Product.ENTERPRISE: "Enterprise Edition",
    Product.BUSINESS: "Business Edition",
    Product.STARTER: "Starter Edition",
    Product.CLUSTER_SERVER: "Cluster Server Edition",
    Product.DATACENTER_SERVER: "Datacenter Edition",
    Product.DATACENTER_SERVER_CORE: "Datacenter Edition (core installation)",
    Product.ENTERPRISE_SERVER: "Enterprise Edition",
    Product.ENTERPRISE_SERVER_CORE: "Enterprise Edition (core installation)",
    Product.ENTERPRISE_SERVER_IA64: "Enterprise Edition for Itanium-based Systems",
    Product.SMALLBUSINESS_SERVER: "Small Business Server",
    Product.SMALLBUSINESS_SERVER_PREMIUM: "Small Business Server Premium Edition",
    Product.STANDARD_SERVER: "Standard Edition",
    Product.STANDARD_SERVER_CORE: "Standard Edition (core installation)",
    Product.WEB_SERVER: "Web Server Edition",
}


@dataclass(frozen=True)
class WindowsVersionInfo:
    """The version facts from which a Windows display name is built."""

    major: int
    minor: int
    build: int = 0
    platform_id: int = VER_PLATFORM_WIN32_NT
    product_type: int = VER_NT_WORKSTATION
    suite_mask: int = 0
    csd_version: str = ""
    processor_architecture: int = PROCESSOR_ARCHITECTURE_INTEL
    product_info: int = 0
    server_r2: bool = False


def _server_2003_edition(info: WindowsVersionInfo) -> str:
    suites = Suite(info.suite_mask & sum(Suite))
    arch = info.processor_architecture
    if arch == PROCESSOR_ARCHITECTURE_IA64:
        if Suite.DATACENTER in suites:
            return "Datacenter Edition for Itanium-based Systems"
        if Suite.ENTERPRISE in suites:
            return "Enterprise Edition for Itanium-based Systems"
        return ""
    if arch == PROCESSOR_ARCHITECTURE_AMD64:
        if Suite.DATACENTER in suites:
            return "Datacenter x64 Edition"
        if Suite.ENTERPRISE in suites:
            return "Enterprise x64 Edition"
        return "Standard x64 Edition"
    if Suite.COMPUTE_SERVER in suites:
        return "Compute Cluster Edition"
    if Suite.DATACENTER in suites:
        return "Datacenter Edition"
    if Suite.ENTERPRISE in suites:
        return "Enterprise Edition"
    if Suite.BLADE in suites:
        return "Web Edition"
    return "Standard Edition"


def windows_display_string(info: WindowsVersionInfo) -> str:
    """Build a human-readable Windows name such as ``Microsoft Windows 7 ...``.

    Raises :class:`ValueError` for versions older than the NT 5 family.
    """
    if info.platform_id != VER_PLATFORM_WIN32_NT or info.major <= 4:
        raise ValueError("unsupported version of Windows")

    workstation = info.product_type == VER_NT_WORKSTATION
    suites = info.suite_mask
    parts = ["Microsoft "]

    if info.major == 6:
        if info.minor == 0:
            parts.append("Windows Vista " if workstation else "Windows Server 2008 ")
        if info.minor in (1, 2):
            if workstation and info.minor == 1:
                parts.append("Windows 7 ")
            elif workstation and info.minor == 2:
                parts.append("Windows 8 ")
            else:
                parts.append("Windows Server 2008 R2 ")
        try:
            parts.append(_PRODUCT_EDITIONS[Product(info.product_info)])
        except ValueError:
            pass

    if info.major == 5 and info.minor == 2:
        if info.server_r2:
            parts.append("Windows Server 2003 R2, ")
        elif suites & Suite.STORAGE_SERVER:
            parts.append("Windows Storage Server 2003")
        elif suites & Suite.WH_SERVER:
            parts.append("Windows Home Server")
        elif workstation and info.processor_architecture == PROCESSOR_ARCHITECTURE_AMD64:
            parts.append("Windows XP Professional x64 Edition")
        else:
            parts.append("Windows Server 2003, ")
        if not workstation:
            parts.append(_server_2003_edition(info))

    if info.major == 5 and info.minor == 1:
        parts.append("Windows XP ")
        parts.append("Home Edition" if suites & Suite.PERSONAL else "Professional")

    if info.major == 5 and info.minor == 0:
        parts.append("Windows 2000 ")
        if workstation:
            parts.append("Professional")
        elif suites & Suite.DATACENTER:
            parts.append("Datacenter Server")
        elif suites & Suite.ENTERPRISE:
            parts.append("Advanced Server")
        else:
            parts.append("Server")

    if info.csd_version:
        parts.append(" " + info.csd_version)

    parts.append(f" (build {info.build})")

    if info.major >= 6:
        if info.processor_architecture == PROCESSOR_ARCHITECTURE_AMD64:
            parts.append(", 64-bit")
        elif info.processor_architecture == PROCESSOR_ARCHITECTURE_INTEL:
            parts.append(", 32-bit")

    return "".join(parts)[:_DISPLAY_LIMIT]


def mac_version_string(major: int, minor: int, bugfix: int, machine: str) -> str:
    """Format a macOS version the way the environment report shows it."""
    return f"Mac OS X Version {int(major)}.{int(minor)}.{int(bugfix)} {machine}"


def format_mac_address(node: int) -> str:
    """Format a 48-bit hardware address as six colon-separated hex bytes."""
    node = int(node)
    if not 0 <= node < 1 << 48:
        raise ValueError("a hardware address has 48 bits")
    return ":".join(f"{b:02x}" for b in node.to_bytes(6, "big"))


_ARCHITECTURES = {
    "AMD64": PROCESSOR_ARCHITECTURE_AMD64,
    "X86_64": PROCESSOR_ARCHITECTURE_AMD64,
    "IA64": PROCESSOR_ARCHITECTURE_IA64,
    "ARM64": PROCESSOR_ARCHITECTURE_ARM64,
    "X86": PROCESSOR_ARCHITECTURE_INTEL,
    "I386": PROCESSOR_ARCHITECTURE_INTEL,
    "I686": PROCESSOR_ARCHITECTURE_INTEL,
}


def _current_windows_info() -> WindowsVersionInfo:
    version = sys.getwindowsversion()  # type: ignore[attr-defined]
    arch = _ARCHITECTURES.get(platform.machine().upper(), PROCESSOR_ARCHITECTURE_INTEL)
    return WindowsVersionInfo(
        major=version.major,
        minor=version.minor,
        build=version.build,
        platform_id=version.platform,
        product_type=version.product_type,
        suite_mask=version.suite_mask,
        csd_version=version.service_pack,
        processor_architecture=arch,
    )


def _mac_version_numbers() -> tuple[int, int, int]:
    release = platform.mac_ver()[0]
    numbers = [int(p) for p in release.split(".") if p.isdigit()][:3]
    numbers += [0] * (3 - len(numbers))
    return numbers[0], numbers[1], numbers[2]


def os_version_string() -> str:
    """Describe the running operating system and its version."""
    if sys.platform == "darwin":
        return mac_version_string(*_mac_version_numbers(), platform.machine())
    if sys.platform == "win32":
        try:
            return windows_display_string(_current_windows_info())
        except ValueError:
            return _UNEXPECTED_WINDOWS
    return " ".join(p for p in (platform.system(), platform.release(), platform.machine()) if p)


def mac_address() -> str:
    """The primary hardware address, or an empty string if none is found."""
    node = uuid.getnode()
    if node >> 40 & 0x01:
        # a multicast bit marks an address made up for lack of a real one
        return ""
    return format_mac_address(node)


def _windows_machine_guid() -> str:
    import winreg

    try:
        with winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE, r"SOFTWARE\Microsoft\Cryptography", 0, winreg.KEY_READ
        ) as key:
            value, _ = winreg.QueryValueEx(key, "MachineGuid")
    except OSError:
        return ""
    return str(value)


def unique_id() -> str:
    """An identifier unique to this machine, or an empty string if unknown."""
    if sys.platform == "win32":
        return _windows_machine_guid()
    for candidate in ("/etc/machine-id", "/var/lib/dbus/machine-id"):
        try:
            text = Path(candidate).read_text(encoding="ascii").strip()
        except (OSError, UnicodeDecodeError):
            continue
        if text:
            return text
    return ""


def _platform_name() -> str:
    if sys.platform == "darwin":
        return "mac"
    if sys.platform == "win32":
        return "win"
    return sys.platform


def _architecture() -> str:
    return "x86_64" if sys.maxsize > 2**32 else "i386"


class Environment:
    """Send facts about the host out of five outlets when banged."""

    description = "Get info about the current max environment."

    def __init__(
        self,
        *,
        os_version: Callable[[], str] = os_version_string,
        macaddr: Callable[[], str] = mac_address,
        identifier: Callable[[], str] = unique_id,
        platform_name: Optional[str] = None,
        architecture: Optional[str] = None,
    ) -> None:
        self.out_platform = Outlet("(symbol) platform")
        self.out_arch = Outlet("(symbol) architecture")
        self.out_os = Outlet("(symbol) operating system version")
        self.out_macaddr = Outlet("(symbol) primary MAC address")
        self.out_id = Outlet("(symbol) unique identifier")
        self._os_version = os_version
        self._macaddr = macaddr
        self._identifier = identifier
        self._platform = platform_name if platform_name is not None else _platform_name()
        self._arch = architecture if architecture is not None else _architecture()

    def bang(self) -> None:
        """Send id, address, OS version, architecture and platform, in that order."""
        self.out_id.send(self._identifier())
        self.out_macaddr.send(self._macaddr())
        self.out_os.send(self._os_version())
        self.out_arch.send(self._arch)
        self.out_platform.send(self._platform)