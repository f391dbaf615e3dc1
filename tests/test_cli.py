import numpy as np
import pytest
from PIL import Image

from generate_wang_tiles import main, parse_args
from wang_errors import PreconditionError


@pytest.fixture
def image_file(tmp_path, source_image):
    path = tmp_path / "photo.png"
    Image.fromarray(source_image).save(path)
    return path


def test_parse_args_defaults(image_file):
    args = parse_args([str(image_file)])

    assert args.tiles == 8
    assert args.resolution == 64
    assert not args.packed
    assert args.preview is None


def test_parse_args_rejects_unsupported_values(image_file):
    with pytest.raises(SystemExit):
        parse_args([str(image_file), "--tiles", "5"])


def test_main_writes_tiles_and_extras(tmp_path, image_file):
    out = tmp_path / "tiles"
    preview = tmp_path / "preview.png"

    main([
        str(image_file), "--tiles", "4", "--resolution", "16", "--seed", "1",
        "--workers", "1", "--output-dir", str(out), "--packed", "--sample-texture",
        "--preview", str(preview),
    ])

    assert sorted(path.name for path in out.glob("tile*.png")) == [
        "tile.png", "tile0.png", "tile1.png", "tile2.png", "tile3.png",
    ]
    with Image.open(out / "sample_texture.png") as texture:
        assert texture.size == (4 * 16, 6 * 16)
    assert preview.exists()


def test_main_propagates_precondition_errors(tmp_path):
    path = tmp_path / "small.png"
    Image.fromarray(np.zeros((16, 40, 3), dtype=np.uint8)).save(path)

    with pytest.raises(PreconditionError):
        main([str(path), "--tiles", "4", "--resolution", "16", "--output-dir", str(tmp_path / "tiles")])
