"""Card themes, decorative figures and stock wallpapers."""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class CardTheme:
    """Color scheme of a poem card."""
    
    name: str
    border: str
    bg_from: str
    bg_to: str
    title: str
    text: str
    tag: str


COLORS: Dict[str, str] = {
    "cinnabar": "#8a3836",  # Zhu Sha
    "bamboo": "#5c6e58",    # Zhu Zi
    "gold": "#d4af37",      # Liu Huang
    "ink": "#1c1c1c",       # Mo
    "paper": "#f7f5f0",     # Xuan Zhi
}

CARD_THEMES: List[CardTheme] = [
    CardTheme("Rouge (胭脂)", "#881337", "#fff1f2", "#ffe4e6", "#881337", "#9f1239", "#e11d48"),
    CardTheme("Emerald (祖母绿)", "#065f46", "#ecfdf5", "#d1fae5", "#064e3b", "#065f46", "#059669"),
    CardTheme("Indigo (靛青)", "#3730a3", "#eef2ff", "#e0e7ff", "#312e81", "#3730a3", "#4f46e5"),
    CardTheme("Amber (琥珀)", "#92400e", "#fffbeb", "#fef3c7", "#78350f", "#92400e", "#b45309"),
    CardTheme("Cyan (天青)", "#155e75", "#ecfeff", "#cffafe", "#164e63", "#155e75", "#0891b2"),
    CardTheme("Violet (紫罗兰)", "#701a75", "#fdf4ff", "#fae8ff", "#701a75", "#86198f", "#a21caf"),
]

FIGURE_IMAGES: List[str] = [
    "baishan.png", "benyue.png", "bottle.mei.png", "bottom.qunshan.png", "cao.png",
    "chuan.png", "ddh.png", "default.png", "denglou1.png", "denglou2.png",
    "denglouchuan.png", "fanchuan.png", "fenhua.png", "fenshu.png", "fenyue.png",
    "flower.moon.png", "girl.png", "guilinshanshui.png", "guohua.hehua.png", "guohua.hehua2.png",
    "guohua.hua.png", "he.png", "hehua.caise.png", "hehua.yu.shan.png", "hehua2.png",
    "hehua3.png", "hehuaqingting.png", "hehuayu.png", "hengshan.png", "heyue.png",
    "honghua.png", "huaniao.png", "huaping.png", "huashan.png", "hudie.png",
    "huizhuzi.png", "huofenghuang.png", "jianzhi.png", "jinyu.png", "left.bottom.mutong.png",
    "left.mei.png", "liahudie.png", "liangduohua.png", "lianiao.png", "long.png",
    "luohong.png", "lvzhu.png", "meihua.pink.png", "meihua.png", "meihua.shuimo.png",
    "meinv.png", "meinv2.png", "moon.png", "mozhu.png", "mujin.png",
    "mutong.png", "pomo.png", "pomodian.png", "qiangyan.png", "qunshan.png",
    "red.flower.png", "right.bottom.hehua.png", "right.bottom.honghehua.png", "right.bottom.hongmujin.png",
    "right.bottom.huaping.png", "right.bottom.qunshan.png", "right.bottom.yesun.png", "shuanghe.png",
    "shuanghe2.png", "song.png", "sundown.png", "wave.png", "xia.png",
    "yellow.flower.png", "yu.png", "yunshan.png", "yuweng.png", "zhuzi.png",
    "zuibaxian.png",
]

WALLPAPERS: List[str] = [
    "0.jpg", "1.jpg", "2.jpg", "3.jpg", "4.jpg", "5.jpg", "6.jpg", "7.jpg", "8.jpg", "9.jpg",
    "11.jpg", "13.jpg", "15.jpg", "16.jpg", "17.jpg", "19.jpg",
    "20.jpg", "21.jpg", "22.jpg", "23.jpg", "25.jpg", "26.jpg", "27.jpg", "28.jpg", "29.jpg",
    "30.jpg", "31.jpg", "32.jpg", "33.jpg", "34.jpg", "35.jpg", "36.jpg", "37.jpg",
    "39.png", "40.jpg",
]

# Swatches offered for card text
FONT_COLORS: List[str] = [
    "#333333", "#8B4513", "#1a365d", "#2f855a", "#c53030", "#ffffff", "#000000",
    "#F59E0B", "#10B981", "#3B82F6", "#6366F1", "#8B5CF6", "#EC4899",
]
