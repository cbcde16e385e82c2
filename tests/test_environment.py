import pytest

from minkit.environment import (
    PROCESSOR_ARCHITECTURE_AMD64,
    PROCESSOR_ARCHITECTURE_IA64,
    PROCESSOR_ARCHITECTURE_INTEL,
    Environment,
    Product,
    Suite,
    WindowsVersionInfo,
    format_mac_address,
    mac_address,
    mac_version_string,
    os_version_string,
    unique_id,
    windows_display_string,
)

SERVER = 3


def test_windows_7_professional_full_string():
    info = WindowsVersionInfo(
        major=6,
        minor=1,
        build=7601,
        csd_version="Service Pack 1",
        processor_architecture=PROCESSOR_ARCHITECTURE_AMD64,
        product_info=Product.PROFESSIONAL,
    )
    assert (
        windows_display_string(info)
        == "Microsoft Windows 7 Professional Service Pack 1 (build 7601), 64-bit"
    )


def test_vista_and_server_2008():
    vista = windows_display_string(WindowsVersionInfo(major=6, minor=0, build=6000))
    assert vista.startswith("Microsoft Windows Vista ")
    assert vista.endswith(", 32-bit")
    server = windows_display_string(
        WindowsVersionInfo(major=6, minor=0, product_type=SERVER)
    )
    assert server.startswith("Microsoft Windows Server 2008 ")


def test_windows_8_and_server_2008_r2():
    eight = windows_display_string(WindowsVersionInfo(major=6, minor=2))
    assert "Windows 8 " in eight
    r2 = windows_display_string(
        WindowsVersionInfo(
            major=6, minor=1, product_type=SERVER, product_info=Product.DATACENTER_SERVER
        )
    )
    assert "Windows Server 2008 R2 Datacenter Edition" in r2


def test_unknown_product_adds_no_edition():
    text = windows_display_string(WindowsVersionInfo(major=6, minor=1, build=7, product_info=0x7777))
    assert text.startswith("Microsoft Windows 7  (build 7)")


def test_xp_editions():
    home = windows_display_string(
        WindowsVersionInfo(major=5, minor=1, build=2600, suite_mask=Suite.PERSONAL)
    )
    assert home == "Microsoft Windows XP Home Edition (build 2600)"
    pro = windows_display_string(WindowsVersionInfo(major=5, minor=1))
    assert "Windows XP Professional" in pro


def test_xp_has_no_bitness_suffix():
    text = windows_display_string(
        WindowsVersionInfo(major=5, minor=1, processor_architecture=PROCESSOR_ARCHITECTURE_AMD64)
    )
    assert "bit" not in text


def test_windows_2000_server_variants():
    def name(mask):
        return windows_display_string(
            WindowsVersionInfo(major=5, minor=0, product_type=SERVER, suite_mask=mask)
        )

    assert "Windows 2000 Datacenter Server" in name(Suite.DATACENTER)
    assert "Windows 2000 Advanced Server" in name(Suite.ENTERPRISE)
    assert "Windows 2000 Server" in name(0)
    assert "Windows 2000 Professional" in windows_display_string(
        WindowsVersionInfo(major=5, minor=0)
    )


def test_server_2003_variants():
    r2 = windows_display_string(
        WindowsVersionInfo(major=5, minor=2, product_type=SERVER, server_r2=True)
    )
    assert "Windows Server 2003 R2, Standard Edition" in r2
    itanium = windows_display_string(
        WindowsVersionInfo(
            major=5,
            minor=2,
            product_type=SERVER,
            suite_mask=Suite.DATACENTER,
            processor_architecture=PROCESSOR_ARCHITECTURE_IA64,
        )
    )
    assert "Datacenter Edition for Itanium-based Systems" in itanium
    x64 = windows_display_string(
        WindowsVersionInfo(
            major=5,
            minor=2,
            product_type=SERVER,
            processor_architecture=PROCESSOR_ARCHITECTURE_AMD64,
        )
    )
    assert "Windows Server 2003, Standard x64 Edition" in x64
    web = windows_display_string(
        WindowsVersionInfo(major=5, minor=2, product_type=SERVER, suite_mask=Suite.BLADE)
    )
    assert "Web Edition" in web


def test_xp_x64_and_home_server():
    xp64 = windows_display_string(
        WindowsVersionInfo(major=5, minor=2, processor_architecture=PROCESSOR_ARCHITECTURE_AMD64)
    )
    assert "Windows XP Professional x64 Edition" in xp64
    home = windows_display_string(
        WindowsVersionInfo(major=5, minor=2, suite_mask=Suite.WH_SERVER)
    )
    assert "Windows Home Server" in home


def test_build_number_is_included():
    text = windows_display_string(
        WindowsVersionInfo(major=10, minor=0, build=19045, processor_architecture=PROCESSOR_ARCHITECTURE_INTEL)
    )
    assert "(build 19045)" in text
    assert text.startswith("Microsoft ")


@pytest.mark.parametrize(
    "info",
    [
        WindowsVersionInfo(major=4, minor=0),
        WindowsVersionInfo(major=6, minor=1, platform_id=1),
    ],
)
def test_unsupported_windows_raises(info):
    with pytest.raises(ValueError):
        windows_display_string(info)


def test_display_string_is_limited_in_length():
    text = windows_display_string(
        WindowsVersionInfo(major=6, minor=1, csd_version="x" * 400)
    )
    assert len(text) == 255


def test_mac_version_string():
    assert mac_version_string(10, 14, 6, "x86_64") == "Mac OS X Version 10.14.6 x86_64"


def test_format_mac_address():
    assert format_mac_address(0x020000000001) == "02:00:00:00:00:01"
    assert format_mac_address(0) == "00:00:00:00:00:00"


@pytest.mark.parametrize("node", [-1, 1 << 48])
def test_format_mac_address_rejects_out_of_range(node):
    with pytest.raises(ValueError):
        format_mac_address(node)


def test_mac_address_is_empty_or_well_formed():
    address = mac_address()
    if address:
        assert len(address) == 17
        assert format_mac_address(int(address.replace(":", ""), 16)) == address
    else:
        assert address == ""


def test_os_version_string_is_stable_and_non_empty():
    first = os_version_string()
    assert len(first) > 0
    assert os_version_string() == first


def test_unique_id_is_stable():
    first = unique_id()
    second = unique_id()
    assert second == first
    assert first.strip() == first


def test_environment_bang_sends_each_fact():
    env = Environment(
        os_version=lambda: "Some OS 1.0",
        macaddr=lambda: "02:00:00:00:00:01",
        identifier=lambda: "placeholder-id",
        platform_name="mac",
        architecture="x86_64",
    )
    env.bang()
    assert env.out_id.messages == [["placeholder-id"]]
    assert env.out_macaddr.messages == [["02:00:00:00:00:01"]]
    assert env.out_os.messages == [["Some OS 1.0"]]
    assert env.out_arch.messages == [["x86_64"]]
    assert env.out_platform.messages == [["mac"]]


def test_environment_bang_order():
    order = []
    env = Environment(
        os_version=lambda: order.append("os") or "os",
        macaddr=lambda: order.append("mac") or "mac",
        identifier=lambda: order.append("id") or "id",
    )
    env.bang()
    assert order == ["id", "mac", "os"]
    assert env.out_arch.messages[0][0] in ("x86_64", "i386")


def test_environment_default_probes_produce_strings():
    env = Environment()
    env.bang()
    assert env.out_os.messages == [[os_version_string()]]
    assert env.out_id.messages == [[unique_id()]]
    assert len(env.out_platform.messages) == 1