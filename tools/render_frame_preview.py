import argparse
import sys
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Render a QR code into a frame template and write the composed SVG."
    )
    parser.add_argument("--template", default="envelope-style", help="模板ID（默认：envelope-style）")
    parser.add_argument("--content", default="https://example.com", help="二维码内容")
    parser.add_argument("--out", default="", help="输出SVG路径（默认：<template>.svg）")
    parser.add_argument("--catalog", default="", help="可选：模板目录YAML路径")
    parser.add_argument(
        "--backend",
        default="",
        choices=["", "etree", "lxml"],
        help="可选：文档后端（默认取运行期配置）",
    )
    parser.add_argument(
        "--profile",
        default="client",
        choices=["client", "preview"],
        help="尺寸场景（默认：client）",
    )
    parser.add_argument("--list", action="store_true", help="仅列出模板")
    args = parser.parse_args()

    _add_backend_to_path()
    from qrframe.config import TemplateCatalog, configure_logging, get_config  # type: ignore
    from qrframe.interfaces import QRFrameError  # type: ignore
    from qrframe.service import FramedQRService  # type: ignore

    config = get_config()
    if args.backend:
        config.compositing.document_backend = args.backend
    configure_logging(config)

    catalog = TemplateCatalog.load(args.catalog or config.catalog.path)

    if args.list:
        for template in catalog:
            print(
                f"{template.id:<20} {template.category:<10} "
                f"placeholder={template.placeholder.width:g}x{template.placeholder.height:g} "
                f"qrScale={template.qr_scale:g}"
            )
        return 0

    service = FramedQRService(catalog=catalog, config=config)
    try:
        svg = service.render_framed(args.content, args.template, profile=args.profile)
    except QRFrameError as exc:
        print(f"合成失败: {exc}")
        return 1

    out_path = Path(args.out or f"{args.template}.svg")
    out_path.write_text(svg, encoding="utf-8")
    print(f"已写入: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
