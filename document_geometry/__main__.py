#!/usr/bin/env python3
"""
CLI interface for the document geometry analyzer.

Usage:
    python -m document_geometry analyze -i page.jpg
    python -m document_geometry analyze -i page.jpg --save --annotate preview.png
    python -m document_geometry history
"""

import argparse
import json
import sys
from pathlib import Path

from .analyzer import DocumentAnalyzer
from .raster import ImageDecodeError, load_image
from .visualizer import GeometryVisualizer


def parse_args(argv=None):
    """Parse command line arguments"""
    import constants

    parser = argparse.ArgumentParser(
        prog='python -m document_geometry',
        description='Paper size, font size and margin estimation for page photos',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:

  # Analyze a page and print the result
  python -m document_geometry analyze -i page.jpg

  # Analyze, store in history and write an annotated preview
  python -m document_geometry analyze -i page.jpg --save --annotate preview.png

  # Show / manage stored analyses
  python -m document_geometry history
  python -m document_geometry delete 3
  python -m document_geometry clear
        """
    )

    parser.add_argument(
        '--db',
        default=constants.DATABASE_PATH,
        help=f'History database (default: {constants.DATABASE_PATH})'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    analyze = subparsers.add_parser('analyze', help='Analyze a page image')
    analyze.add_argument('-i', '--input', required=True, help='Input image')
    analyze.add_argument('--save', action='store_true', help='Store the result in history')
    analyze.add_argument('--annotate', metavar='OUT', help='Write an annotated preview image')
    analyze.add_argument('--candidates', action='store_true', help='Draw every boundary method in the preview')
    analyze.add_argument('--json', action='store_true', help='Print the result as JSON')
    analyze.add_argument('--debug', action='store_true', help='Print per-stage diagnostics')

    subparsers.add_parser('history', help='List stored analyses')

    delete = subparsers.add_parser('delete', help='Delete a stored analysis')
    delete.add_argument('id', type=int, help='Record id')

    subparsers.add_parser('clear', help='Delete all stored analyses')

    return parser.parse_args(argv)


def print_analysis(analysis):
    print(f"   Paper size: {analysis.paper_size}")
    print(f"   Font size:  {analysis.font_size_pt:.1f} pt")
    print(f"   Margins:    top {analysis.top_margin:.2f}in, bottom {analysis.bottom_margin:.2f}in, "
          f"left {analysis.left_margin:.2f}in, right {analysis.right_margin:.2f}in")


def run_analyze(args) -> int:
    if not Path(args.input).exists():
        print(f"❌ Error: input file not found: {args.input}")
        return 1

    analyzer = DocumentAnalyzer(debug=args.debug)

    try:
        image = load_image(args.input)
    except ImageDecodeError as e:
        print(f"❌ Error: {e}")
        return 1

    if not args.json:
        print(f"📄 Analyzing: {Path(args.input).name}")

    analysis, report = analyzer.analyze_with_report(image, args.input)

    if args.save:
        from history import AnalysisStore, StoreError
        try:
            store = AnalysisStore(args.db)
            analysis = analysis.with_id(store.create(analysis))
        except StoreError as e:
            print(f"❌ Error while saving: {e}")
            return 1

    if args.annotate:
        try:
            GeometryVisualizer().save(
                args.annotate, image, report, analysis, draw_candidates=args.candidates
            )
        except ValueError as e:
            print(f"❌ Error: {e}")
            return 1

    if args.json:
        print(json.dumps(analysis.to_dict(), indent=2))
        return 0

    print_analysis(analysis)
    if analysis.id is not None:
        print(f"💾 Saved as #{analysis.id}")
    if args.annotate:
        print(f"🖼️  Preview: {args.annotate}")
    print("✅ Done")
    return 0


def run_history(args) -> int:
    from history import AnalysisStore

    items = AnalysisStore(args.db).list_all()
    if not items:
        print("📭 No stored analyses")
        return 0

    for item in items:
        created = item.created_at.strftime("%Y-%m-%d %H:%M:%S")
        print(f"#{item.id}  {created}  {item.source_image_path}")
        print_analysis(item)
    return 0


def run_delete(args) -> int:
    from history import AnalysisStore

    if not AnalysisStore(args.db).delete(args.id):
        print(f"❌ Error: record #{args.id} not found")
        return 1
    print(f"🗑️  Deleted #{args.id}")
    return 0


def run_clear(args) -> int:
    from history import AnalysisStore

    removed = AnalysisStore(args.db).clear()
    print(f"🗑️  Deleted {removed} record(s)")
    return 0


COMMANDS = {
    'analyze': run_analyze,
    'history': run_history,
    'delete': run_delete,
    'clear': run_clear,
}


def main(argv=None) -> int:
    """Main CLI function"""
    args = parse_args(argv)

    try:
        return COMMANDS[args.command](args)
    except Exception as e:
        print(f"❌ Error: {e}")
        if getattr(args, 'debug', False):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
