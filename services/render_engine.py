"""
RenderEngine for sample cards and review panels.

Builds the HTML shown by the Gradio app: sample cards with lazy audio,
pagination and statistics panels, transcript diffs, and the script that
keeps only one audio element playing at a time.
"""

import html
import re
from typing import Optional

from models import EvaluationRecord, Page, Preferences

AUDIO_PATH_PATTERN = re.compile(r'sample_([0-9]+)\.wav\Z')

# Route Gradio serves allowed local files from
DEFAULT_FILE_ROUTE = "/gradio_api/file="


def map_audio_path(path: str, audio_dir: str = "audio_fixed") -> str:
    """
    Map a results path to the local audio file.

    ``.../sample_42.wav`` becomes ``audio_fixed/sample_00042.wav``. Paths
    without a sample number are returned unchanged.
    """
    match = AUDIO_PATH_PATTERN.search(path)
    if match:
        sample_number = int(match.group(1))
        return f"{audio_dir.rstrip('/')}/sample_{sample_number:05d}.wav"
    return path


class RenderEngine:
    """
    HTML rendering for the review workbench.

    Attributes:
        audio_dir: Local directory holding the audio files
        file_route: URL prefix under which Gradio serves those files
    """

    def __init__(self, audio_dir: str = "audio_fixed", file_route: str = DEFAULT_FILE_ROUTE):
        self.audio_dir = audio_dir
        self.file_route = file_route

    def audio_url(self, path: str) -> str:
        return f"{self.file_route}{map_audio_path(path, self.audio_dir)}"

    def render_card(self, record: EvaluationRecord, display_number: int, font_size: int) -> str:
        """
        Render one sample card.

        The card shows the positional display number, not the sample id.
        Audio uses ``preload="none"`` so nothing is fetched until played.
        """
        text_style = f'style="font-size: {font_size}px"'
        return f'''
        <div class="audio-card" data-index="{display_number - 1}">
            <div class="sample-info">Sample #{display_number}</div>
            <audio class="audio-player" controls preload="none" src="{html.escape(self.audio_url(record.path))}">
                Your browser does not support the audio element.
            </audio>
            <div class="text-section ground-truth">
                <h3>Ground Truth</h3>
                <div class="text-content" {text_style}>{html.escape(record.ground_truth)}</div>
            </div>
            <div class="text-section prediction">
                <h3>Model Prediction</h3>
                <div class="text-content" {text_style}>{html.escape(record.prediction)}</div>
            </div>
        </div>
        '''

    def render_page(self, page: Page, preferences: Preferences) -> str:
        """
        Render every card of a page inside the list/grid container.

        Args:
            page: Page to render
            preferences: Font size, view and theme to apply

        Returns:
            HTML string for the cards container
        """
        theme = ' data-theme="dark"' if preferences.dark_mode else ''

        if not page.items:
            return f'<div class="cards-container {preferences.view}-view"{theme}><div class="empty-state">No samples loaded</div></div>'

        cards = [
            self.render_card(record, page.display_number(i), preferences.font_size)
            for i, record in enumerate(page.items)
        ]
        return f'<div class="cards-container {preferences.view}-view"{theme}>{"".join(cards)}</div>'

    def render_pagination_info(self, page: Page) -> str:
        return f'''
        <div class="pagination-info">
            <span class="page-info">{page.page_label}</span>
            <span class="item-info">{page.range_label}</span>
        </div>
        '''

    def render_stats(self, total_samples: int, word_error_rate: Optional[float]) -> str:
        """Header statistics: sample count and corpus WER."""
        wer_text = "-" if word_error_rate is None else f"{word_error_rate * 100:.1f}%"
        return f'''
        <div class="stats-panel">
            <span class="stat"><span class="stat-label">Total Samples</span>
                <span class="stat-value">{total_samples}</span></span>
            <span class="stat"><span class="stat-label">WER</span>
                <span class="stat-value">{wer_text}</span></span>
        </div>
        '''

    def render_detail_title(self, global_index: int) -> str:
        return f"### Sample #{global_index + 1} Analysis"

    def render_text(self, text: str, font_size: int) -> str:
        return f'<div class="modal-text-content" style="font-size: {font_size}px">{html.escape(text)}</div>'

    def render_diff_tags(self, text: str, font_size: Optional[int] = None) -> str:
        """
        Convert <false>/<true> tags to styled HTML.

        Applies visual styling:
        - <false> (missed by the prediction) → red text with strikethrough
        - <true> (added by the prediction) → green text

        Text outside the tags is escaped.
        """
        if not text:
            return ""

        escaped = html.escape(text, quote=False)
        escaped = re.sub(
            r'&lt;false&gt;(.*?)&lt;/false&gt;',
            r'<span class="diff-missing" style="color: #d32f2f; text-decoration: line-through; background: #ffebee; padding: 2px 4px; border-radius: 3px;">\1</span>',
            escaped,
            flags=re.DOTALL
        )
        escaped = re.sub(
            r'&lt;true&gt;(.*?)&lt;/true&gt;',
            r'<span class="diff-added" style="color: #388e3c; background: #e8f5e9; padding: 2px 4px; border-radius: 3px;">\1</span>',
            escaped,
            flags=re.DOTALL
        )

        style = f' style="font-size: {font_size}px"' if font_size else ''
        return f'<div class="diff-display"{style}>{escaped}</div>'

    def render_loading(self) -> str:
        return '<div class="loading"><span class="loading-text">Loading evaluation data...</span></div>'

    def render_error(self, message: str) -> str:
        return f'<div class="error"><span class="error-text">{html.escape(message)}</span></div>'

    def render_status(self, message: str) -> str:
        return f'<div class="load-status">{html.escape(message)}</div>'

    def get_head(self) -> str:
        """
        Script injected into the page head.

        Pauses and rewinds every other audio element when one starts
        playing, and keeps the ``playing`` class on the active card.
        """
        return """
        <script>
        document.addEventListener('play', function (event) {
            var current = event.target;
            if (!current || current.tagName !== 'AUDIO') { return; }
            document.querySelectorAll('audio').forEach(function (audio) {
                if (audio !== current && !audio.paused) {
                    audio.pause();
                    audio.currentTime = 0;
                }
                var other = audio.closest('.audio-card');
                if (other && audio !== current) { other.classList.remove('playing'); }
            });
            var card = current.closest('.audio-card');
            if (card) { card.classList.add('playing'); }
        }, true);

        ['pause', 'ended'].forEach(function (name) {
            document.addEventListener(name, function (event) {
                var target = event.target;
                if (!target || target.tagName !== 'AUDIO') { return; }
                var card = target.closest('.audio-card');
                if (card) { card.classList.remove('playing'); }
            }, true);
        });

        document.addEventListener('error', function (event) {
            var target = event.target;
            if (!target || target.tagName !== 'AUDIO') { return; }
            console.warn('Audio error:', target.currentSrc);
            var card = target.closest('.audio-card');
            if (card) { card.classList.add('audio-error'); }
        }, true);
        </script>
        """
