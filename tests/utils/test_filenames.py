from image_attachments.utils.filenames import generate_filename


class TestGenerateFilename:
    def test_has_extension(self) -> None:
        filename = generate_filename("png")

        stem, extension = filename.rsplit(".", 1)
        assert extension == "png"
        assert len(stem) == 32
        int(stem, 16)

    def test_unique(self) -> None:
        names = {generate_filename("jpg") for _ in range(1000)}

        assert len(names) == 1000
