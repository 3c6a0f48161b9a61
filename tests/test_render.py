from datetime import datetime

from todolist.models import Task
from todolist.render import render_tasks

NOW = datetime(2024, 5, 1, 12, 0, 0)


def test_empty_state():
    html = render_tasks([])
    assert "No tasks yet! Start adding something to do." in html
    assert 'name="task"' in html
    assert 'name="add_task"' in html


def test_add_form_posts_to_list():
    html = render_tasks([])
    assert '<form method="POST" action="/"' in html


def test_task_controls():
    html = render_tasks([Task(id=7, description="Buy milk", created_at=NOW)])
    assert "Buy milk" in html
    assert "No tasks yet!" not in html
    assert "/?action=toggle&amp;id=7" in html
    assert "/?action=delete&amp;id=7" in html
    assert "return confirm('Are you sure you want to delete this task?');" in html


def test_pending_and_completed_differ():
    html = render_tasks(
        [
            Task(id=1, description="Pending one", created_at=NOW),
            Task(id=2, description="Done one", completed=True, created_at=NOW),
        ]
    )
    pending = html.split('id="todo-1"')[1].split("</li>")[0]
    done = html.split('id="todo-2"')[1].split("</li>")[0]
    assert 'title="Mark as Complete"' in pending
    assert "completed-task" not in pending
    assert 'title="Mark as Pending"' in done
    assert "completed-task" in done


def test_keeps_given_order():
    html = render_tasks(
        [
            Task(id=3, description="third", created_at=NOW),
            Task(id=1, description="first", created_at=NOW),
        ]
    )
    assert html.index("third") < html.index("first")


def test_description_is_escaped():
    html = render_tasks([Task(id=1, description="<script>alert('x')</script>", created_at=NOW)])
    assert "<script>alert(" not in html
    assert "&lt;script&gt;alert(&#39;x&#39;)&lt;/script&gt;" in html


def test_attribute_breakout_is_escaped():
    html = render_tasks([Task(id=1, description='" onmouseover="evil()', created_at=NOW)])
    assert 'onmouseover="evil()' not in html
    assert "&#34; onmouseover=&#34;evil()" in html
