import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import collage_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from collage_toolkit.core.models import AlgorithmInput, ImageDimensions, PoolImage  # noqa: E402


# Common test fixtures
@pytest.fixture
def make_images():
    """Factory for lists of ImageDimensions from (width, height) pairs."""
    def _make(*sizes, prefix="img"):
        return [ImageDimensions(f"{prefix}{i}", w, h) for i, (w, h) in enumerate(sizes)]
    return _make


@pytest.fixture
def mixed_images():
    """Twelve images of assorted sizes and orientations (inches)."""
    sizes = [
        (4.0, 3.0), (3.0, 4.0), (2.0, 2.0), (5.0, 3.5), (2.5, 3.5), (3.0, 2.0),
        (1.5, 2.5), (4.5, 4.5), (2.0, 3.0), (3.5, 2.5), (1.5, 1.5), (2.0, 1.2),
    ]
    return [ImageDimensions(f"photo{i}", w, h) for i, (w, h) in enumerate(sizes)]


@pytest.fixture
def mixed_input(mixed_images):
    """Letter page with an eighth-inch gap and the mixed image set."""
    return AlgorithmInput(
        images=mixed_images,
        page_width=8.5,
        page_height=11.0,
        gap_inches=0.125,
        min_image_size_inches=1.0,
        seed=1234,
    )


@pytest.fixture
def sample_pool():
    """Pool of pixel-sized images as supplied by an upload component."""
    sizes = [(1200, 900), (900, 1200), (600, 600), (1500, 1000), (800, 1200), (1000, 700)]
    return [PoolImage(id=f"p{i}", width_pixels=w, height_pixels=h) for i, (w, h) in enumerate(sizes)]


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
