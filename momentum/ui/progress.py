# ui/progress.py

def progress_bar(percent: int, length: int = 12):
    """Генерирует текстовый progress bar (блоки)"""
    percent = max(0, min(100, percent))
    done = int(length * percent // 100)
    todo = length - done
    return "█" * done + "░" * todo + f" {percent}%"

def level_bar(level: int, level_progress: int, points_to_next: int):
    return f"Level {level}  ({points_to_next} pts to next level)\n" + progress_bar(level_progress)

def streak_emoji(streak: int):
    if streak >= 30:
        return "🏆"
    elif streak >= 7:
        return "🔥"
    elif streak >= 3:
        return "✨"
    else:
        return "🔹"
