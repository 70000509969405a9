"""Delivery URLs for the named transformation presets."""

DELIVERY_ROOT = "https://res.cloudinary.com"

PRESETS = {
    "thumbnail": "c_fill,w_400,h_400,g_auto,q_auto,f_auto",
    "small": "c_limit,w_400,q_auto,f_auto",
    "medium": "c_limit,w_800,q_auto,f_auto",
    "large": "c_limit,w_1200,q_auto,f_auto",
    "xlarge": "c_limit,w_2000,q_auto:best,f_auto",
    "gallery": "c_limit,w_600,q_auto:good,f_auto",
    "hero": "c_fill,w_1920,h_1080,g_auto,q_auto,f_auto",
    "placeholder": "c_limit,w_50,q_auto,e_blur:1000",
}


def delivery_base(cloud_name: str) -> str:
    return f"{DELIVERY_ROOT}/{cloud_name}/image/upload"


def synthesize_urls(public_id: str, base: str, presets: dict[str, str] = PRESETS) -> dict[str, str]:
    """One URL per preset: base/transform/public_id."""
    return {name: f"{base}/{transform}/{public_id}" for name, transform in presets.items()}


def derived_id(public_id: str) -> str:
    """Flat lookup key for an asset: path separators become underscores."""
    return public_id.replace("/", "_")
