import argparse
from pathlib import Path

from PIL import Image

from chart_axis import AxisContext, FontOverlapEstimator, Scale, parse_date, pick_scale
from chart_axis.render import draw_date_axis

PAD = 40


def render_preview(start: float, end: float, out_path: str | Path, *, width: int = 800, height: int = 80) -> list[str]:
    """Pick a scale for [start, end] and draw it as a horizontal axis PNG."""
    scale = Scale(min=start, max=end)
    pick_scale(
        scale,
        estimator=FontOverlapEstimator(),
        context=AxisContext(length_px=width - 2 * PAD),
    )
    img = Image.new("RGB", (width, height), "white")
    labels = draw_date_axis(img, scale, p0=PAD, p1=width - PAD, at=height // 3)

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(out_path)
    return labels


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Render a date axis preview.")
    ap.add_argument("start")
    ap.add_argument("end")
    ap.add_argument("--fmt", default="%Y-%m-%d", help="strptime format of start/end")
    ap.add_argument("--out", default="axis_preview.png")
    ap.add_argument("--width", type=int, default=800)
    args = ap.parse_args()

    labels = render_preview(parse_date(args.start, args.fmt), parse_date(args.end, args.fmt), args.out, width=args.width)
    print(f"Wrote {args.out}: {' | '.join(labels)}")
