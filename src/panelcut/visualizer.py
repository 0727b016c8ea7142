"""시각화 모듈"""

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.patches import Rectangle as MPLRect
from matplotlib import font_manager
import platform

from .cut_sequence import cut_lines, derive_cut_sequence
from .summary import summarize_offcuts


def setup_korean_font():
    """한글 폰트 설정"""
    system = platform.system()
    if system == 'Darwin':
        fonts = ['AppleGothic', 'AppleSDGothicNeo', 'Nanum Gothic']
    elif system == 'Windows':
        fonts = ['Malgun Gothic', 'NanumGothic', 'Gulim']
    else:
        fonts = ['NanumGothic', 'Noto Sans CJK KR', 'UnDotum']

    available_fonts = [f.name for f in font_manager.fontManager.ttflist]
    for font in fonts:
        if font in available_fonts:
            plt.rcParams['font.family'] = font
            return font
    print("⚠️  한글 폰트를 찾지 못했습니다.")
    return None


def print_cut_sequence(panel, index):
    """원판 1장의 재단 순서 출력"""
    rip_cuts = derive_cut_sequence(panel)

    print(f"\n{'='*60}")
    print(f"원판 {index}")
    print(f"배치된 조각: {len(panel.pieces)}개")
    print(f"1차 절단: {len(rip_cuts)}회\n")

    print("절단 순서:")
    for rip_idx, rip in enumerate(rip_cuts, 1):
        print(f"  {rip_idx:2d}. 띠 y={rip.y:g}, 두께 {rip.thickness:g}")
        for cross_idx, cross in enumerate(rip.cross_cuts, 1):
            p = cross.piece
            rotated = " (회전)" if p.rotated else ""
            print(f"      {rip_idx}.{cross_idx} {p.placed_width:g}×{p.placed_height:g} "
                  f"@ ({p.x:g},{p.y:g}){rotated}")

    print(f"\n  사용률: {panel.utilization * 100:.1f}%")
    return rip_cuts


def visualize_result(result, output='panelcut_layout.png', show=True):
    """시각화 함수

    Args:
        result: OptimizeResult (원판별 조각 배치, 자투리)
        output: 저장할 이미지 파일 경로
        show: plt.show() 호출 여부
    """
    panels = result.panels
    if not panels:
        print("배치된 원판이 없습니다.")
        if result.unplaced:
            print(f"❌ 배치할 수 없는 조각: {len(result.unplaced)}개")
        return None

    # 색상
    piece_types = sorted(set(f"{p.piece.width:g}x{p.piece.height:g}" for p in result.placed_pieces))
    colors = {ptype: plt.cm.Set3(i / len(piece_types))
              for i, ptype in enumerate(piece_types)}

    fig, axes = plt.subplots(1, len(panels), figsize=(10 * len(panels), 5))
    if len(panels) == 1:
        axes = [axes]

    for plot_idx, panel in enumerate(panels):
        ax = axes[plot_idx]
        print_cut_sequence(panel, plot_idx + 1)

        ax.add_patch(MPLRect((0, 0), panel.width, panel.height,
                             fill=False, edgecolor='black', linewidth=2))

        # 자투리
        for offcut in panel.offcuts:
            ax.add_patch(MPLRect((offcut.x, offcut.y), offcut.width, offcut.height,
                                 linewidth=0.5, edgecolor='gray', facecolor='lightgray',
                                 hatch='//', alpha=0.4))

        for placed in panel.pieces:
            x, y = placed.x, placed.y
            w, h = placed.placed_width, placed.placed_height
            color = colors[f"{placed.piece.width:g}x{placed.piece.height:g}"]

            ax.add_patch(MPLRect((x, y), w, h,
                                 linewidth=1, edgecolor='black',
                                 facecolor=color, alpha=0.7))

            label = f"{w:g}×{h:g}"
            if placed.rotated:
                label += "\n(회전)"
            ax.text(x + w/2, y + h/2, label, ha='center', va='center',
                    fontsize=8, fontweight='bold')

        # 절단선 - 1차(수평, 빨강) / 2차(수직, 파랑)
        lines = cut_lines(panel)
        for cut in lines:
            if cut['direction'] == 'H':
                ax.plot([cut['start'], cut['end']],
                        [cut['position'], cut['position']],
                        'r-', linewidth=2.5, alpha=0.8)
                mid_x = (cut['start'] + cut['end']) / 2
                ax.text(mid_x, cut['position'], str(cut['order']),
                        ha='center', va='bottom', fontsize=11,
                        fontweight='bold', color='red',
                        bbox=dict(boxstyle='circle,pad=0.3', facecolor='white',
                                  edgecolor='red', linewidth=2))
            else:
                ax.plot([cut['position'], cut['position']],
                        [cut['start'], cut['end']],
                        'b-', linewidth=2.5, alpha=0.8)
                mid_y = (cut['start'] + cut['end']) / 2
                ax.text(cut['position'], mid_y, str(cut['order']),
                        ha='left', va='center', fontsize=11,
                        fontweight='bold', color='blue',
                        bbox=dict(boxstyle='circle,pad=0.3', facecolor='white',
                                  edgecolor='blue', linewidth=2))

        usage = panel.utilization * 100
        ax.set_xlim(0, panel.width)
        # 좌상단 원점
        ax.set_ylim(panel.height, 0)
        ax.set_aspect('equal')
        ax.set_xlabel('가로')
        ax.set_ylabel('세로')
        ax.set_title(f'원판 {plot_idx + 1} ({panel.width:g}×{panel.height:g})\n'
                     f'사용률: {usage:.1f}% | 절단: {len(lines)}회',
                     fontsize=12, fontweight='bold')
        ax.grid(True, alpha=0.3)

    print(f"\n{'='*60}")
    print(f"총 사용 원판: {len(panels)}장")

    offcut_items = summarize_offcuts(panels)
    if offcut_items:
        print("\n자투리 목록:")
        for item in offcut_items:
            print(f"  {item.width:.1f} × {item.height:.1f}  ×{item.quantity}")

    if result.unplaced:
        print(f"\n❌ 배치할 수 없는 조각: {len(result.unplaced)}개")
        for piece in result.unplaced_pieces[:3]:
            print(f"  {piece.width:g}×{piece.height:g}")
        if len(result.unplaced) > 3:
            print(f"  ... 외 {len(result.unplaced) - 3}개")

    legend_elements = [patches.Patch(facecolor=colors[ptype], alpha=0.7,
                                     edgecolor='black', label=ptype)
                       for ptype in piece_types]
    fig.legend(handles=legend_elements, loc='upper center',
               bbox_to_anchor=(0.5, 0.98), ncol=max(1, len(piece_types)))

    plt.tight_layout()
    plt.savefig(output, dpi=150, bbox_inches='tight')
    print(f"\n시각화 파일 저장: {output}")
    if show:
        plt.show()
    return fig


# 폰트 설정 초기화
setup_korean_font()
plt.rcParams['axes.unicode_minus'] = False
