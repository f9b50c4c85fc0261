from terminal_racer.ui.ansi import screen, draw_track

__all__ = ['screen', 'draw_track']
