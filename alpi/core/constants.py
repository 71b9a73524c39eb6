"""
Project constants definitions
"""

# ============================================================
# Repositories
# ============================================================

SUCKLESS_REPO = "https://github.com/nirucon/suckless"
LOOKANDFEEL_REPO = "https://github.com/nirucon/suckless_lookandfeel"
LOOKANDFEEL_BRANCH = "main"
NIRI_CONFIG_REPO = "https://github.com/nirucon/niri"
YAY_REPO = "https://aur.archlinux.org/yay-bin.git"
LAZYVIM_REPO = "https://github.com/LazyVim/starter"

# ============================================================
# Paths (relative to $HOME unless noted)
# ============================================================

SUCKLESS_DIR_NAME = "suckless"            # under $XDG_CONFIG_HOME
CACHE_DIR = ".cache/alpi"
LOOKANDFEEL_DIR_NAME = "lookandfeel"      # under CACHE_DIR
NIRI_CONFIG_DIR_NAME = "niri-config"      # under CACHE_DIR
YAY_DIR_NAME = "yay-bin"                  # under CACHE_DIR
LOCAL_BIN = ".local/bin"
PROFILE_FILE = ".bash_profile"
XINITRC_HOOKS_DIR_NAME = "xinitrc.d"      # under $XDG_CONFIG_HOME
SUCKLESS_PREFIX = "/usr/local"
SYSTEM_ROOT = "/"

DEFAULT_CONFIG_FILE = "~/.config/alpi/config.toml"
ENV_PREFIX = "ALPI_"

# ============================================================
# Managed Text Blocks
# ============================================================

BLOCK_START_PREFIX = "# >>> "
BLOCK_END_PREFIX = "# <<< "
BLOCK_OWNER_SUFFIX = " (managed by alpi)"

SESSION_SELECTOR_BLOCK = "ALPI SESSION SELECTOR"
ENV_BLOCK = "ALPI ENV"
WAYLAND_ENV_BLOCK = "ALPI WAYLAND ENV"

BACKUP_SUFFIX = ".bak."
BACKUP_DATE_FORMAT = "%Y%m%d"

# ============================================================
# File Modes
# ============================================================

DATA_MODE = 0o644
EXEC_MODE = 0o755

# ============================================================
# Components
# ============================================================

SUCKLESS_COMPONENTS = ("dwm", "st", "dmenu", "slock", "slstatus")

DOTFILES = (".xinitrc", ".bashrc", ".bash_aliases", ".inputrc", ".Xresources")

CONFIG_DIRS = ("alacritty", "cmus", "dunst", "gtk-3.0", "picom", "rofi")

# ============================================================
# Palette (MatteBlack, mirrors dwm config.h)
# ============================================================

PALETTE = {
    "bg": "#0f0f10",
    "fg": "#e5e5e5",
    "fg_dim": "#a8a8a8",
    "accent": "#3a3a3d",
    "border": "#2a2a2d",
    "border_sel": "#5a5a60",
}

# ============================================================
# Packages
# ============================================================

PACMAN_CORE = (
    "base", "base-devel", "git", "make", "gcc", "pkgconf", "curl", "wget",
    "unzip", "zip", "tar", "rsync",
    "grep", "sed", "findutils", "coreutils", "which", "diffutils", "gawk",
    "htop", "less", "nano", "tree", "imlib2", "bash-completion",
    "networkmanager", "openssh", "inetutils", "bind-tools", "iproute2",
    "wireless_tools", "iw", "tailscale",
    "xorg-setxkbmap",
    "pipewire", "pipewire-alsa", "pipewire-pulse", "pipewire-jack",
    "wireplumber", "pavucontrol",
    "xorg-server", "xorg-xinit", "xorg-xsetroot", "xorg-xrandr", "xorg-xset",
    "xorg-xinput",
    "ttf-dejavu", "noto-fonts", "ttf-nerd-fonts-symbols-mono",
    "ufw", "btrfs-progs",
)

PACMAN_APPS = (
    "feh", "arandr", "pcmanfm", "gvfs", "gvfs-mtp", "gvfs-gphoto2", "gvfs-afc",
    "udisks2", "udiskie",
    "picom", "rofi",
    "flameshot", "maim", "slop",
    "alacritty",
    "dunst", "libnotify",
    "lxappearance", "materia-gtk-theme", "papirus-icon-theme",
    "qt5ct", "kvantum-qt5", "qt5-base", "qt6ct", "qt6-base",
    "noto-fonts-emoji",
    "mpv", "cmus", "cava", "gimp", "sxiv", "imagemagick", "resvg", "playerctl",
    "7zip", "poppler", "yazi", "filezilla",
    "btop", "fastfetch",
    "blueman",
    "xclip", "brightnessctl", "bc",
    "nextcloud-client",
    "neovim", "lazygit", "ripgrep", "fd", "fzf", "jq", "zoxide",
    "python-pynvim", "nodejs", "npm",
    "gtk3", "gtk4",
)

PACMAN_NIRI = (
    "wayland", "wayland-protocols", "xorg-xwayland",
    "foot",
    "waybar",
    "swaylock",
    "swayidle",
    "swaybg",
    "slurp",
    "wl-clipboard",
    "mako",
    "wofi",
    "kanshi",
    "xdg-desktop-portal-gnome",
    "xdg-desktop-portal",
    "qt5-wayland", "qt6-wayland",
    "libinput",
    "polkit-gnome",
)

SUCKLESS_BUILD_DEPS = (
    "base-devel", "libx11", "libxft", "libxinerama", "libxrandr", "libxext",
    "libxrender", "libxfixes", "freetype2", "fontconfig", "xorg-xsetroot",
    "xorg-xinit",
)

AUR_APPS = (
    "ttf-jetbrains-mono-nerd",
    "brave-bin",
    "spotify",
    "xautolock",
    "localsend-bin",
    "reversal-icon-theme-git",
    "fresh-editor-bin",
)

AUR_NIRI = ("niri",)

# ============================================================
# Verification
# ============================================================

VERIFY_X11_COMMANDS = ("dwm", "st", "dmenu", "slock", "slstatus")
VERIFY_NIRI_COMMANDS = (
    "niri", "waybar", "foot", "swaylock", "swayidle", "swaybg", "slurp",
    "mako", "wofi",
)
VERIFY_ESSENTIAL_COMMANDS = ("git", "make", "gcc", "picom", "rofi", "feh", "alacritty", "nvim")
VERIFY_SERVICES = (
    "NetworkManager",
    "tailscaled",
    "systemd-zram-setup@zram0",
    "paccache.timer",
    "fstrim.timer",
)
VERIFY_FONTS = ("JetBrainsMono Nerd", "Symbols Nerd Font")

# ============================================================
# Defaults
# ============================================================

DEFAULT_LOG_LEVEL = "WARNING"
