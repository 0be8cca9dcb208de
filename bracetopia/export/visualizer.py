"""Visualization and export for Bracetopia."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.patches import Patch
from pathlib import Path
from typing import List, TYPE_CHECKING
from PIL import Image
import io

from ..model.cell import CellValue

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        CellValue.VACANT: '#ECF0F1',   # Light gray
        CellValue.NEWLINE: '#3498DB',  # Blue
        CellValue.ENDLINE: '#F39C12',  # Orange
    }

    def __init__(self, dimension: int):
        self.dimension = dimension
        self.frames: List[Image.Image] = []
        # Lookup table indexed by cell value
        self._palette = np.array(
            [to_rgb(self.COLORS[value]) for value in CellValue]
        )

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        fig, ax = plt.subplots(figsize=(6, 6.5))

        image = self._palette[state.cells.astype(np.intp)]
        ax.imshow(image, origin='upper', aspect='equal', interpolation='nearest')

        ax.set_title(f'Cycle {state.cycle} | Moves: {state.moves} | '
                     f'Happiness: {state.happiness:.4f}')
        ax.set_xticks([])
        ax.set_yticks([])

        legend_elements = [
            Patch(facecolor=self.COLORS[CellValue.NEWLINE], label='Newline'),
            Patch(facecolor=self.COLORS[CellValue.ENDLINE], label='Endline'),
            Patch(facecolor=self.COLORS[CellValue.VACANT],
                  edgecolor='black', linewidth=0.3, label='Vacant'),
        ]
        ax.legend(handles=legend_elements, loc='upper center',
                  bbox_to_anchor=(0.5, -0.02), ncol=3, fontsize=8)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 4) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
