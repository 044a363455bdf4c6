import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, state, file_path, range_start,
                  range_end, total_rows, cursor, selected, faults
    """
    text = ""
    now = time.time()
    if context.get('status_msg') and now < context.get('status_until', 0):
        text = f" {context['status_msg']}"
    else:
        state = context.get('state', 'populated')
        mode = {'loading': 'LOADING', 'empty': 'EMPTY'}.get(state, 'TABLE')
        fname = context.get('file_path') or '<sample>'
        fname = os.path.basename(fname)
        total_rows = context.get('total_rows', 0)
        parts = [mode, fname]
        if state == 'populated':
            start = context.get('range_start', 0)
            end = context.get('range_end', start)
            parts.append(f"rows {start}-{max(start, end - 1)} of {total_rows}")
            parts.append(f"row {context.get('cursor', 0)}")
        selected = context.get('selected', 0)
        if selected:
            parts.append(f"{selected} selected")
        faults = context.get('faults', 0)
        if faults:
            parts.append(f"{faults} render errors")
        text = " " + " | ".join(parts)

    return text.ljust(width)[:width]
