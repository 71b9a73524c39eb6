"""
Static file contents written by phase bodies
"""
from ..variant import Variant

# ============================================================
# X11
# ============================================================

XINITRC_TEMPLATE = """\
#!/bin/sh
cd "$HOME"
if [ -z "${{DBUS_SESSION_BUS_ADDRESS-}}" ] && command -v dbus-run-session >/dev/null 2>&1; then
  exec dbus-run-session "$0" "$@"
fi
[ -r "$HOME/.Xresources" ] && xrdb -merge "$HOME/.Xresources"
command -v setxkbmap >/dev/null 2>&1 && setxkbmap se
command -v xsetroot  >/dev/null 2>&1 && xsetroot -solid "{bg}"
if [ -d "$HOME/.config/xinitrc.d" ]; then
  for hook in "$HOME/.config/xinitrc.d"/*.sh; do
    [ -x "$hook" ] && . "$hook"
  done
fi
trap 'kill -- -$$' EXIT
while true; do {prefix}/bin/dwm 2>/tmp/dwm.log; done
"""


def xinitrc(background: str, prefix: str) -> str:
    return XINITRC_TEMPLATE.format(bg=background, prefix=prefix)


HOOK_SUCKLESS = """\
#!/bin/sh
if command -v xautolock >/dev/null 2>&1 && command -v slock >/dev/null 2>&1; then
    xautolock -time 10 -locker slock &
fi
"""

HOOK_LOOKANDFEEL = """\
#!/bin/sh
command -v picom >/dev/null 2>&1 && picom --config "$HOME/.config/picom/picom.conf" --daemon
if [ -x "$HOME/.local/bin/wallrotate.sh" ]; then
    "$HOME/.local/bin/wallrotate.sh" &
elif command -v feh >/dev/null 2>&1 && [ -d "$HOME/Wallpapers" ]; then
    feh --randomize --bg-fill "$HOME/Wallpapers" &
fi
command -v dunst >/dev/null 2>&1 && dunst &
command -v blueman-applet >/dev/null 2>&1 && blueman-applet &
command -v udiskie >/dev/null 2>&1 && udiskie --tray &
command -v nextcloud >/dev/null 2>&1 && nextcloud --background &
"""

HOOK_STATUSBAR = """\
#!/bin/sh
[ -x "$HOME/.local/bin/dwm-status.sh" ] && "$HOME/.local/bin/dwm-status.sh" &
"""

# ============================================================
# Wayland
# ============================================================

POLKIT_AUTOSTART = """\
[Desktop Entry]
Type=Application
Name=PolicyKit Authentication Agent
Exec=/usr/lib/polkit-gnome/polkit-gnome-authentication-agent-1
NoDisplay=true
X-GNOME-AutoRestart=false
"""

WAYLAND_ENV = """\
export XDG_SESSION_TYPE=wayland
export MOZ_ENABLE_WAYLAND=1
export QT_QPA_PLATFORM=wayland
export ELECTRON_OZONE_PLATFORM_HINT=wayland
"""

# ============================================================
# Profile
# ============================================================

PROFILE_ENV = """\
export PATH="$HOME/.local/bin:$PATH"
export EDITOR=nvim
export VISUAL=nvim
"""

_SELECTOR_HEAD = """\
if [ -z "$DISPLAY" ] && [ -z "$WAYLAND_DISPLAY" ] && [ "$(tty)" = "/dev/tty1" ]; then
    echo ""
    echo "  ┌──────────────────────────────────────────┐"
    echo "  │      NIRUCON - Choose your session       │"
    echo "  ├──────────────────────────────────────────┤"
"""

_SELECTOR_FOOT = """\
    echo "  └──────────────────────────────────────────┘"
    echo ""
"""

_START_X11 = "exec startx"
_START_NIRI = 'exec "$HOME/.local/bin/start-niri"'


def _menu_line(text: str) -> str:
    return f'    echo "  │   {text:<39}│"\n'


def session_selector(variant: Variant) -> str:
    """Login-time session menu shown on tty1, one flavour per variant"""
    if variant == Variant.BOTH:
        entries = ["1)  dwm  ·  X11     (suckless)", "2)  niri ·  Wayland (waybar + foot)", "3)  exit ·  Shell prompt only"]
        prompt = "Session [1/2/3, Enter = dwm]: "
        cases = [("2", _START_NIRI), ("3", ":"), ("*", _START_X11)]
    elif variant == Variant.X11:
        entries = ["1)  dwm  ·  X11 (suckless)", "2)  exit ·  Shell prompt only"]
        prompt = "Session [1/2, Enter = dwm]: "
        cases = [("2", ":"), ("*", _START_X11)]
    else:
        entries = ["1)  niri ·  Wayland (waybar + foot)", "2)  exit ·  Shell prompt only"]
        prompt = "Session [1/2, Enter = niri]: "
        cases = [("2", ":"), ("*", _START_NIRI)]

    out = _SELECTOR_HEAD
    out += "".join(_menu_line(e) for e in entries)
    out += _SELECTOR_FOOT
    out += f'    read -r -p "  {prompt}" _ses\n'
    out += '    case "$_ses" in\n'
    out += "".join(f"        {pat}) {cmd} ;;\n" for pat, cmd in cases)
    out += "    esac\n"
    out += "fi\n"
    return out

# ============================================================
# System tuning (/etc drop-ins)
# ============================================================

ZRAM_CONF = """\
[zram0]
zram-size = ram / 2
compression-algorithm = zstd
swap-priority = 100
"""

JOURNALD_CONF = """\
[Journal]
Storage=persistent
SystemMaxUse=500M
RuntimeMaxUse=200M
MaxRetentionSec=1month
RateLimitIntervalSec=30s
RateLimitBurst=1000
"""

SYSCTL_TEMPLATE = """\
vm.swappiness = 60
vm.vfs_cache_pressure = 50
fs.inotify.max_user_watches = 1048576
fs.inotify.max_user_instances = 1024
net.core.default_qdisc = {qdisc}
net.ipv4.tcp_congestion_control = bbr
net.ipv4.tcp_fastopen = 3
"""


def sysctl_conf(qdisc: str) -> str:
    return SYSCTL_TEMPLATE.format(qdisc=qdisc)


OOMD_CONF = """\
[OOM]
DefaultMemoryPressureDurationSec=2min
DefaultMemoryPressureThreshold=70%
"""

SNAPPER_TIMELINE_LIMITS = (
    ("TIMELINE_LIMIT_HOURLY", "0"),
    ("TIMELINE_LIMIT_DAILY", "3"),
    ("TIMELINE_LIMIT_WEEKLY", "1"),
    ("TIMELINE_LIMIT_MONTHLY", "0"),
    ("TIMELINE_LIMIT_YEARLY", "0"),
)
