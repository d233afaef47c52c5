from dataclasses import dataclass


@dataclass(frozen=True)
class EdgeBounds:
    """
    Content bounding box of a page in image pixel coordinates.

    top and left are offsets from the top and left image edges. bottom and
    right are the coordinates of the far content edge, so the bottom and right
    margins are ``height - bottom`` and ``width - right``.
    """

    top: int
    bottom: int
    left: int
    right: int

    def __str__(self) -> str:
        return f"EdgeBounds(top={self.top}, bottom={self.bottom}, left={self.left}, right={self.right})"

    def as_dict(self) -> dict:
        return {"top": self.top, "bottom": self.bottom, "left": self.left, "right": self.right}

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def is_degenerate(self) -> bool:
        """True when the box has no area."""
        return self.width <= 0 or self.height <= 0

    def area(self) -> int:
        """
        Calculate the area of the content box.

        Returns:
        - int: The area in pixels, 0 for a degenerate box.
        """
        if self.is_degenerate():
            return 0
        return self.width * self.height

    def margins_px(self, image_width: int, image_height: int) -> dict:
        """
        Distance of each content edge from the matching image edge.

        Parameters:
        - image_width (int): Width of the image the bounds were measured on.
        - image_height (int): Height of the image the bounds were measured on.

        Returns:
        - dict: Pixel margins keyed by top, bottom, left and right.
        """
        return {
            "top": self.top,
            "bottom": image_height - self.bottom,
            "left": self.left,
            "right": image_width - self.right,
        }

    def is_inside(self, image_width: int, image_height: int) -> bool:
        return 0 <= self.left <= self.right <= image_width and 0 <= self.top <= self.bottom <= image_height
